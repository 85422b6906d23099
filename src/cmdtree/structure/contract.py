"""
Emitter data contract for a resolved command tree.

The contract is everything a code generator needs: the sorted attribute table,
the path-ordered leaves with their parameter-bundle shapes, the canonical name
of every command, and the global flags including the implicit help flag. It
is plain data and serialises to JSON.
"""

from enum import Enum
from typing import Any

from attrs import asdict, frozen

from cmdtree.config import HELP_FLAG
from cmdtree.core.nodes import Argument, Flag, Topic
from cmdtree.core.path_utils import python_name
from cmdtree.core.tree import AttributeDef, ResolvedTree
from cmdtree.structure.resolver import attribute_or_default

HELP_HANDLER = "help"


@frozen
class LeafShape:
    """
    Parameter-bundle shape and metadata of one leaf command.

    Params:
        path: Full command path
        canonical_name: Presentation identifier of the command
        handler_name: Name of the handler operation for this leaf
        flags: Local flags
        arguments: Positional arguments in order
        global_flags: Inherited global flags, help first
        attributes: Effective value of every attribute in the table
    """

    path: str
    canonical_name: str
    handler_name: str
    flags: tuple[Flag, ...]
    arguments: tuple[Argument, ...]
    global_flags: tuple[Flag, ...]
    attributes: tuple[tuple[str, bool | str | int], ...]


@frozen
class EmitterContract:
    """Everything an emitter consumes, derived once from a resolved tree."""

    attribute_table: tuple[AttributeDef, ...]
    leaves: tuple[LeafShape, ...]
    canonical_names: tuple[tuple[str, str], ...]
    global_flags: tuple[Flag, ...]
    topics: tuple[Topic, ...]
    app_name: str | None = None
    tagline: str | None = None

    @property
    def handler_names(self) -> list[str]:
        """One operation per leaf in path order, then `help`."""
        return [leaf.handler_name for leaf in self.leaves] + [HELP_HANDLER]

    def leaf(self, path: str) -> LeafShape | None:
        for leaf in self.leaves:
            if leaf.path == path:
                return leaf
        return None


def build_contract(tree: ResolvedTree) -> EmitterContract:
    """
    Derive the emitter contract from a resolved tree.

    A leaf whose handler name would be `help` gets `help_`, leaving `help`
    to the help operation.

    Params:
        tree: Resolved command tree

    Returns:
        The contract

    Raises:
        ValueError: If two leaves map to the same handler name
    """
    global_flags = (HELP_FLAG,) + tree.global_flags
    leaves = []
    seen: dict[str, str] = {}
    for command in tree.leaf_commands():
        handler = python_name(command.canonical_name)
        if handler == HELP_HANDLER:
            handler += "_"
        if handler in seen:
            raise ValueError(
                f"command {command.path!r} and {seen[handler]} share handler name {handler!r}"
            )
        seen[handler] = repr(command.path)
        leaves.append(
            LeafShape(
                path=command.path,
                canonical_name=command.canonical_name,
                handler_name=handler,
                flags=command.flags,
                arguments=command.arguments,
                global_flags=global_flags,
                attributes=tuple(
                    (definition.name, attribute_or_default(tree, command, definition.name))
                    for definition in tree.attribute_table
                ),
            )
        )
    return EmitterContract(
        attribute_table=tree.attribute_table,
        leaves=tuple(leaves),
        canonical_names=tuple(
            (command.path, command.canonical_name) for command in tree.walk()
        ),
        global_flags=global_flags,
        topics=tree.topics,
        app_name=tree.app_name,
        tagline=tree.tagline,
    )


def _serialize(instance, attribute, value) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def contract_to_dict(contract: EmitterContract, namespace: str) -> dict[str, Any]:
    """JSON-ready representation of a contract for the given namespace."""
    data = asdict(contract, value_serializer=_serialize)
    data["handler_names"] = contract.handler_names
    return {"namespace": namespace, **data}


def tree_to_dict(tree: ResolvedTree) -> list[dict[str, Any]]:
    """JSON-ready list of every command in depth-first declaration order."""
    out = []
    for command in tree.walk():
        data = asdict(command, value_serializer=_serialize)
        data["children"] = [tree.command(i).path for i in command.children]
        data["parent"] = None if command.parent is None else tree.command(command.parent).path
        data["attributes"] = {name: value.value for name, value in command.attributes}
        del data["index"]
        out.append(data)
    return out
