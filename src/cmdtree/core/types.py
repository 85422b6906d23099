"""
Core type definitions for cmdtree.

This module contains the attribute value sum type and the kind vocabularies
shared by the parser, the resolver and the dispatch engine.
"""

from enum import Enum

from attrs import field, frozen

BOOL = "bool"
STRING = "string"
INT = "int"

# Kinds a flag may carry once the tree is resolved
FLAG_KINDS = frozenset({BOOL, STRING})


class AttributeKind(Enum):
    """Kind of an attribute value."""

    BOOL = BOOL
    STRING = STRING
    INT = INT

    @property
    def zero_value(self) -> bool | str | int:
        """Value used when an attribute of this kind is absent."""
        if self is AttributeKind.BOOL:
            return False
        if self is AttributeKind.STRING:
            return ""
        if self is AttributeKind.INT:
            return 0
        raise AssertionError(f"unhandled attribute kind: {self}")

    @property
    def python_type(self) -> type:
        """Python type used to represent values of this kind."""
        if self is AttributeKind.BOOL:
            return bool
        if self is AttributeKind.STRING:
            return str
        if self is AttributeKind.INT:
            return int
        raise AssertionError(f"unhandled attribute kind: {self}")


def _check_payload(instance: "AttributeValue", attribute, value) -> None:
    expected = instance.kind.python_type
    # bool is a subclass of int, so compare exact types
    if type(value) is not expected:
        raise TypeError(
            f"{instance.kind.value} attribute value must be {expected.__name__}, "
            f"got {type(value).__name__}: {value!r}"
        )


@frozen
class AttributeValue:
    """A typed attribute literal: exactly one of bool, string or int."""

    kind: AttributeKind
    value: bool | str | int = field(validator=_check_payload)

    @classmethod
    def of(cls, value: bool | str | int) -> "AttributeValue":
        """Build a value, inferring its kind from the Python type."""
        if isinstance(value, bool):
            return cls(AttributeKind.BOOL, value)
        if isinstance(value, str):
            return cls(AttributeKind.STRING, value)
        if isinstance(value, int):
            return cls(AttributeKind.INT, value)
        raise TypeError(f"unsupported attribute value type: {type(value).__name__}")

    def __str__(self) -> str:
        if self.kind is AttributeKind.BOOL:
            return "true" if self.value else "false"
        if self.kind is AttributeKind.STRING:
            return f'"{self.value}"'
        return str(self.value)


def flag_zero_value(kind: str) -> bool | str:
    """Default value of an unset flag of the given kind."""
    return False if kind == BOOL else ""
