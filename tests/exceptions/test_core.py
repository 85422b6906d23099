"""
Tests for error context and exception formatting.

This module tests ErrorContext location formatting and the messages carried
by compile-time and runtime exceptions.
"""

from cmdtree.exceptions import (
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
from cmdtree.execution.results import DispatchFailure, FailureKind


class TestErrorContext:
    """Tests for ErrorContext dataclass."""

    def test_create_minimal_context(self):
        ctx = ErrorContext(line=4)
        assert ctx.line == 4
        assert ctx.token is None
        assert ctx.expected is None

    def test_format_location_without_source(self):
        assert ErrorContext(line=4).format_location() == "  at line 4"

    def test_format_location_full(self):
        ctx = ErrorContext(line=2, token="frob", expected="a keyword", source_name="app.cdl")
        formatted = ctx.format_location()
        assert formatted.splitlines() == [
            "  at app.cdl:2",
            "  near 'frob'",
            "  expected a keyword",
        ]


class TestDeclarationErrors:
    """Tests for compile-time exceptions."""

    def test_message_is_line_numbered(self):
        error = DeclarationSyntaxError("expected flag name", ErrorContext(line=7))
        assert str(error) == "line 7: expected flag name"
        assert error.line == 7
        assert error.message == "expected flag name"

    def test_describe_includes_location(self):
        error = DeclarationError("bad", ErrorContext(line=1, token="x"))
        assert error.describe() == "bad\n  at line 1\n  near 'x'"

    def test_hierarchy(self):
        for error in (
            AttributeKindConflictError("level", "string", "int", 3),
            FlagKindError("count", "int", 2),
            DuplicateFlagError("fast", "command 'run'", 4),
        ):
            assert isinstance(error, DeclarationError)
            assert isinstance(error, CmdTreeError)

    def test_flag_kind_error(self):
        error = FlagKindError("count", "int", 2)
        assert str(error) == "line 2: flag 'count' has unsupported kind 'int'"
        assert error.context.expected == "bool or string"

    def test_duplicate_flag_error(self):
        error = DuplicateFlagError("fast", "command 'run'", 4)
        assert str(error) == "line 4: flag 'fast' is declared more than once in command 'run'"


class TestRuntimeErrors:
    """Tests for exceptions raised while running commands."""

    def test_dispatch_error_wraps_failure(self):
        failure = DispatchFailure(FailureKind.SURPLUS_ARGUMENT, token="extra")
        error = DispatchError(failure)
        assert error.failure is failure
        assert str(error) == "unexpected argument: extra"

    def test_handler_not_found(self):
        assert str(HandlerNotFoundError("a/b")) == "no handler registered for command: a/b"

    def test_handler_binding_error(self):
        error = HandlerBindingError(["status", "help"])
        assert error.missing == ["status", "help"]
        assert "status, help" in str(error)
