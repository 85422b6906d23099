"""
Semantic resolution of a parsed declaration.

Validates attribute kinds and flags across the whole tree, computes full paths
and canonical names, collects leaf commands and freezes the result into a
`ResolvedTree`. Attribute inheritance (local override, then global default)
is answered by `resolve_attribute` and `attribute_or_default`.
"""

import logging

from cmdtree.config import HELP_FLAG
from cmdtree.core.nodes import Declaration, Flag
from cmdtree.core.path_utils import canonical_name, join_path
from cmdtree.core.tree import AttributeDef, Command, ResolvedTree
from cmdtree.core.types import FLAG_KINDS, AttributeKind, AttributeValue
from cmdtree.exceptions import AttributeKindConflictError, DuplicateFlagError, FlagKindError

logger = logging.getLogger(__name__)


def collect_attribute_kinds(decl: Declaration) -> list[AttributeDef]:
    """
    Build the attribute table for a declaration.

    Global defaults are visited first, then every command depth-first in
    declaration order. The first kind seen for a name wins; any later
    declaration with a different kind is an error.

    Params:
        decl: Parsed declaration

    Returns:
        One `AttributeDef` per attribute name, sorted by name

    Raises:
        AttributeKindConflictError: When a name is declared with two kinds
    """
    kinds: dict[str, AttributeKind] = {}

    def record(name: str, value: AttributeValue, line: int) -> None:
        existing = kinds.get(name)
        if existing is not None and existing is not value.kind:
            raise AttributeKindConflictError(name, existing.value, value.kind.value, line)
        kinds[name] = value.kind

    for name, value in decl.global_attributes.items():
        record(name, value, decl.global_attribute_lines.get(name, 0))
    for index in decl.walk():
        command = decl.commands[index]
        for name, value in command.attributes.items():
            record(name, value, command.attribute_lines.get(name, command.line))

    return [AttributeDef(name=name, kind=kinds[name]) for name in sorted(kinds)]


def validate_flags(flags: list[Flag], scope: str, reserved: list[Flag] | None = None) -> None:
    """
    Check flag kinds and name/alias uniqueness within one scope.

    Params:
        flags: Flags declared in the scope, in order
        scope: Human-readable scope name used in errors
        reserved: Flags that implicitly occupy the scope (e.g. the help flag)

    Raises:
        FlagKindError: For a kind other than bool or string
        DuplicateFlagError: For a repeated name or short alias
    """
    names = {flag.name for flag in reserved or []}
    shorts = {flag.short for flag in reserved or [] if flag.short}
    for flag in flags:
        if flag.kind not in FLAG_KINDS:
            raise FlagKindError(flag.name, flag.kind, flag.line)
        if flag.name in names:
            raise DuplicateFlagError(flag.name, scope, flag.line)
        if flag.short and flag.short in shorts:
            raise DuplicateFlagError(f"-{flag.short}", scope, flag.line)
        names.add(flag.name)
        if flag.short:
            shorts.add(flag.short)


def resolve(decl: Declaration) -> ResolvedTree:
    """
    Validate a declaration and freeze it into a `ResolvedTree`.

    Params:
        decl: Parsed declaration; it is not modified

    Returns:
        The immutable resolved tree

    Raises:
        AttributeKindConflictError: On conflicting attribute kinds
        FlagKindError: On a flag kind other than bool or string
        DuplicateFlagError: On repeated flag names or aliases in one scope
    """
    attribute_table = collect_attribute_kinds(decl)
    validate_flags(decl.global_flags, "global scope", reserved=[HELP_FLAG])

    paths: dict[int, str] = {}
    for index in decl.walk():
        command = decl.commands[index]
        parent_path = [] if command.parent is None else [paths[command.parent]]
        paths[index] = join_path(parent_path + [command.name])
        validate_flags(command.flags, f"command {paths[index]!r}")

    commands = tuple(
        Command(
            index=command.index,
            name=command.name,
            path=paths[command.index],
            canonical_name=canonical_name(paths[command.index]),
            parent=command.parent,
            children=tuple(command.children),
            description=command.description,
            flags=tuple(command.flags),
            arguments=tuple(command.arguments),
            examples=tuple(command.examples),
            attributes=tuple(command.attributes.items()),
        )
        for command in decl.commands
    )
    leaves = tuple(
        sorted(
            (command.index for command in commands if command.is_leaf),
            key=lambda index: commands[index].path,
        )
    )
    logger.debug(
        "resolved %d commands, %d leaves, %d attributes",
        len(commands),
        len(leaves),
        len(attribute_table),
    )
    return ResolvedTree(
        commands=commands,
        roots=tuple(decl.roots),
        global_flags=tuple(decl.global_flags),
        global_attributes=tuple(decl.global_attributes.items()),
        topics=tuple(decl.topics),
        attribute_table=tuple(attribute_table),
        leaves=leaves,
        app_name=decl.app_name,
        tagline=decl.tagline,
    )


def resolve_attribute(
    tree: ResolvedTree, command: Command | None, name: str
) -> AttributeValue | None:
    """Local override of `command`, else the global default, else `None`."""
    if command is not None:
        local = command.local_attribute(name)
        if local is not None:
            return local
    return tree.global_attribute(name)


def attribute_or_default(
    tree: ResolvedTree, command: Command | None, name: str
) -> bool | str | int:
    """
    Effective value of an attribute for a command.

    This is the single place where an absent attribute becomes the zero value
    of its kind.

    Raises:
        KeyError: If no attribute with this name is declared anywhere
    """
    kind = tree.attribute_kind(name)
    if kind is None:
        raise KeyError(f"attribute {name!r} is not declared")
    value = resolve_attribute(tree, command, name)
    return kind.zero_value if value is None else value.value
