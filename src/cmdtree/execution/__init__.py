"""
cmdtree execution components.

This package resolves argument vectors against a resolved tree, renders help
and runs registered handlers.
"""

from cmdtree.execution.dispatch import Dispatcher, dispatch, is_flag_token
from cmdtree.execution.engine import Engine
from cmdtree.execution.help import (
    render_command_help,
    render_help,
    render_root_help,
    render_topic_help,
)
from cmdtree.execution.results import (
    DispatchFailure,
    DispatchResult,
    FailureKind,
    HelpRequest,
    Invocation,
    ParameterBundle,
)

__all__ = [
    "DispatchFailure",
    "DispatchResult",
    "Dispatcher",
    "Engine",
    "FailureKind",
    "HelpRequest",
    "Invocation",
    "ParameterBundle",
    "dispatch",
    "is_flag_token",
    "render_command_help",
    "render_help",
    "render_root_help",
    "render_topic_help",
]
