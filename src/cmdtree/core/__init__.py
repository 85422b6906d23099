"""
Core cmdtree components.

This package provides the fundamental building blocks for cmdtree: the
attribute value type, declaration and resolved tree records, and path helpers.
"""

from cmdtree.core.nodes import Argument, CommandDecl, Declaration, Flag, Topic
from cmdtree.core.path_utils import (
    PATH_SEPARATOR,
    canonical_name,
    field_name,
    is_valid_identifier,
    join_path,
    python_name,
    split_ident,
    split_path,
    unique_names,
)
from cmdtree.core.tree import AttributeDef, Command, ResolvedTree
from cmdtree.core.types import (
    BOOL,
    FLAG_KINDS,
    INT,
    STRING,
    AttributeKind,
    AttributeValue,
    flag_zero_value,
)

__all__ = [
    "Argument",
    "AttributeDef",
    "AttributeKind",
    "AttributeValue",
    "BOOL",
    "Command",
    "CommandDecl",
    "Declaration",
    "FLAG_KINDS",
    "Flag",
    "INT",
    "PATH_SEPARATOR",
    "ResolvedTree",
    "STRING",
    "Topic",
    "canonical_name",
    "field_name",
    "flag_zero_value",
    "is_valid_identifier",
    "join_path",
    "python_name",
    "split_ident",
    "split_path",
    "unique_names",
]
