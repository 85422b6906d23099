"""
Exception classes for cmdtree declaration compilation and dispatch.

This module defines specific exception types for the error conditions that can
occur while lexing, parsing and resolving a declaration, and while executing a
dispatched command line.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdtree.execution.results import DispatchFailure


@dataclass
class ErrorContext:
    """
    Context information for compile error messages.

    Captures where an error occurred in the declaration source. Every compile
    failure carries at least the 1-based line number.

    Params:
        line: 1-based source line where the failure was detected
        token: Text of the offending token, if any
        expected: Description of what the parser expected at this point
        source_name: Name of the declaration file, when known
    """

    line: int
    token: str | None = None
    expected: str | None = None
    source_name: str | None = None

    def format_location(self) -> str:
        """
        Format location information as indented detail lines.

        Returns:
            Formatted location string, one detail per line
        """
        where = f"{self.source_name}:{self.line}" if self.source_name else f"line {self.line}"
        lines = [f"  at {where}"]
        if self.token:
            lines.append(f"  near {self.token!r}")
        if self.expected:
            lines.append(f"  expected {self.expected}")
        return "\n".join(lines)


class CmdTreeError(Exception):
    """Base exception for all cmdtree errors."""

    pass


class DeclarationError(CmdTreeError):
    """Raised when a declaration cannot be compiled into a command tree."""

    def __init__(self, message: str, context: ErrorContext):
        """
        Initialize the exception.

        Params:
            message: Short description of the failure
            context: Source location of the failure
        """
        self.message = message
        self.context = context
        super().__init__(f"line {context.line}: {message}")

    @property
    def line(self) -> int:
        """1-based line number of the failure."""
        return self.context.line

    def describe(self) -> str:
        """Return the message followed by the formatted location block."""
        return f"{self.message}\n{self.context.format_location()}"


class DeclarationSyntaxError(DeclarationError):
    """Raised for lexical and syntactic faults; parsing stops at the first one."""

    pass


class AttributeKindConflictError(DeclarationError):
    """Raised when one attribute name is declared with two different kinds."""

    def __init__(self, name: str, existing_kind: str, new_kind: str, line: int):
        """
        Initialize the exception.

        Params:
            name: The attribute name
            existing_kind: Kind recorded at the first declaration
            new_kind: Conflicting kind found later
            line: Line of the conflicting declaration
        """
        self.name = name
        self.existing_kind = existing_kind
        self.new_kind = new_kind
        super().__init__(
            f"attribute {name!r} has conflicting kinds: {existing_kind} vs {new_kind}",
            ErrorContext(line=line, token=name),
        )


class FlagKindError(DeclarationError):
    """Raised when a flag is declared with a kind other than bool or string."""

    def __init__(self, flag_name: str, kind: str, line: int):
        self.flag_name = flag_name
        self.kind = kind
        super().__init__(
            f"flag {flag_name!r} has unsupported kind {kind!r}",
            ErrorContext(line=line, token=kind, expected="bool or string"),
        )


class DuplicateFlagError(DeclarationError):
    """Raised when a flag name or short alias is declared twice in one scope."""

    def __init__(self, flag_name: str, scope: str, line: int):
        self.flag_name = flag_name
        self.scope = scope
        super().__init__(
            f"flag {flag_name!r} is declared more than once in {scope}",
            ErrorContext(line=line, token=flag_name),
        )


class DispatchError(CmdTreeError):
    """Raised by the engine when an argument vector cannot be dispatched."""

    def __init__(self, failure: "DispatchFailure"):
        """
        Initialize the exception.

        Params:
            failure: The classified dispatch failure
        """
        self.failure = failure
        super().__init__(failure.describe())


class HandlerNotFoundError(CmdTreeError):
    """Raised when a dispatched leaf command has no registered handler."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"no handler registered for command: {path}")


class HandlerBindingError(CmdTreeError):
    """Raised when a handler object lacks operations for some leaf commands."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"handler object is missing operations: {', '.join(missing)}")
