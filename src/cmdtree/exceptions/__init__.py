"""
cmdtree exception classes.

This package provides all exception types used throughout cmdtree for
consistent error handling and reporting.
"""

from cmdtree.exceptions.core import (
    AttributeKindConflictError,
    CmdTreeError,
    DeclarationError,
    DeclarationSyntaxError,
    DispatchError,
    DuplicateFlagError,
    ErrorContext,
    FlagKindError,
    HandlerBindingError,
    HandlerNotFoundError,
)

__all__ = [
    "CmdTreeError",
    "ErrorContext",
    "DeclarationError",
    "DeclarationSyntaxError",
    "AttributeKindConflictError",
    "FlagKindError",
    "DuplicateFlagError",
    "DispatchError",
    "HandlerNotFoundError",
    "HandlerBindingError",
]
