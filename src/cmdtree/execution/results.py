"""
Outcomes of dispatching an argument vector.

Dispatch returns exactly one of `Invocation`, `HelpRequest` or
`DispatchFailure`. Failures are values, not exceptions; the caller decides
how to present them.
"""

from enum import Enum
from typing import Any

from attrs import field, frozen

from cmdtree.core.nodes import Topic
from cmdtree.core.tree import Command


class FailureKind(Enum):
    """Classification of a dispatch failure."""

    UNKNOWN_COMMAND = "unknown command"
    AMBIGUOUS_COMMAND = "ambiguous command"
    UNKNOWN_FLAG = "unknown flag"
    MISSING_FLAG_VALUE = "missing flag value"
    MISSING_ARGUMENT = "missing argument"
    SURPLUS_ARGUMENT = "surplus argument"


@frozen
class DispatchFailure:
    """
    A terminal dispatch failure with structured context.

    Params:
        kind: Failure class
        token: The offending input token, or the missing argument name
        candidates: Candidate names (siblings) or full paths (omission) when ambiguous
        path: Command path resolved before the failure, empty if none
    """

    kind: FailureKind
    token: str = ""
    candidates: tuple[str, ...] = ()
    path: str = ""

    def describe(self) -> str:
        """Default one-line message for the failure."""
        if self.kind is FailureKind.AMBIGUOUS_COMMAND:
            return f"ambiguous command: {self.token} (candidates: {', '.join(self.candidates)})"
        if self.kind is FailureKind.UNKNOWN_COMMAND:
            shown = f"{self.path} {self.token}" if self.path else self.token
            return f"unknown command: {shown}"
        if self.kind is FailureKind.MISSING_ARGUMENT:
            return f"argument {self.token} is missing"
        if self.kind is FailureKind.SURPLUS_ARGUMENT:
            return f"unexpected argument: {self.token}"
        if self.kind is FailureKind.MISSING_FLAG_VALUE:
            return f"flag {self.token} requires a value"
        if self.kind is FailureKind.UNKNOWN_FLAG:
            return f"unknown flag: {self.token}"
        raise AssertionError(f"unhandled failure kind: {self.kind}")


@frozen
class ParameterBundle:
    """Fully bound values for one leaf command, keyed by declared names."""

    flags: dict[str, bool | str] = field(factory=dict)
    arguments: dict[str, str] = field(factory=dict)
    globals: dict[str, bool | str] = field(factory=dict)

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return {
            "flags": dict(self.flags),
            "args": dict(self.arguments),
            "globals": dict(self.globals),
        }


@frozen
class Invocation:
    """A resolved leaf command with its bound parameters."""

    command: Command
    bundle: ParameterBundle

    @property
    def path(self) -> str:
        return self.command.path


@frozen
class HelpRequest:
    """
    Request to show help instead of running a command.

    `command` is the deepest command reached (None for the root); `topic` is
    set when help was asked for a topic.
    """

    command: Command | None = None
    topic: Topic | None = None
    globals: dict[str, bool | str] = field(factory=dict)

    @property
    def path(self) -> str:
        return self.command.path if self.command is not None else ""


DispatchResult = Invocation | HelpRequest | DispatchFailure
