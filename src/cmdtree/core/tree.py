"""
Resolved, immutable command tree.

The resolver turns a `Declaration` into a `ResolvedTree`. Every record here is
frozen; the tree is read-only for the contract builder, the help renderer and
the dispatch engine, and may be shared between threads.
"""

from collections.abc import Iterator

from attrs import field, frozen

from cmdtree.core.nodes import Argument, Flag, Topic
from cmdtree.core.path_utils import unique_names
from cmdtree.core.types import AttributeKind, AttributeValue


@frozen
class Command:
    """
    A resolved command node.

    Params:
        index: Stable arena index within `ResolvedTree.commands`
        name: Single path segment
        path: Full `/`-joined path from the root
        canonical_name: Presentation identifier derived from the path
        parent: Arena index of the parent, `None` for top-level commands
        children: Arena indices of subcommands in declaration order
    """

    index: int
    name: str
    path: str
    canonical_name: str
    parent: int | None
    children: tuple[int, ...]
    description: str = ""
    flags: tuple[Flag, ...] = ()
    arguments: tuple[Argument, ...] = ()
    examples: tuple[str, ...] = ()
    attributes: tuple[tuple[str, AttributeValue], ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def argument_keys(self) -> list[str]:
        """Bundle keys of the positional arguments; repeated names get a numeric suffix."""
        return unique_names([argument.name for argument in self.arguments])

    def local_attribute(self, name: str) -> AttributeValue | None:
        for attr_name, value in self.attributes:
            if attr_name == name:
                return value
        return None

    def find_flag(self, token: str) -> Flag | None:
        """Local flag named by a `--name` or `-x` token."""
        for flag in self.flags:
            if flag.matches(token):
                return flag
        return None


@frozen
class AttributeDef:
    """One row of the attribute table: a name and its single kind."""

    name: str
    kind: AttributeKind


@frozen
class ResolvedTree:
    """
    Validated command tree with derived lookup tables.

    Params:
        commands: Arena of all commands, indexed by `Command.index`
        roots: Indices of top-level commands in declaration order
        global_flags: Declared global flags (without the implicit help flag)
        global_attributes: Global attribute defaults as (name, value) pairs
        topics: Help topics in declaration order
        attribute_table: Every attribute name with its kind, sorted by name
        leaves: Indices of leaf commands sorted by full path
    """

    commands: tuple[Command, ...]
    roots: tuple[int, ...]
    global_flags: tuple[Flag, ...] = ()
    global_attributes: tuple[tuple[str, AttributeValue], ...] = ()
    topics: tuple[Topic, ...] = ()
    attribute_table: tuple[AttributeDef, ...] = ()
    leaves: tuple[int, ...] = ()
    app_name: str | None = None
    tagline: str | None = None
    _by_path: dict[str, int] = field(init=False, repr=False, eq=False)

    def __attrs_post_init__(self):
        object.__setattr__(
            self, "_by_path", {command.path: command.index for command in self.commands}
        )

    def command(self, index: int) -> Command:
        return self.commands[index]

    def children_of(self, command: Command | None) -> tuple[Command, ...]:
        """Child commands of `command`, or the top-level commands for `None`."""
        indices = self.roots if command is None else command.children
        return tuple(self.commands[i] for i in indices)

    def parent_of(self, command: Command) -> Command | None:
        return None if command.parent is None else self.commands[command.parent]

    def ancestors(self, command: Command) -> list[Command]:
        """Commands from the root down to, and including, `command`."""
        chain = [command]
        while chain[-1].parent is not None:
            chain.append(self.commands[chain[-1].parent])
        return list(reversed(chain))

    def find(self, path: str) -> Command | None:
        """Look up a command by its exact full path."""
        index = self._by_path.get(path)
        return None if index is None else self.commands[index]

    def walk(self, command: Command | None = None) -> Iterator[Command]:
        """Yield commands depth-first in declaration order."""
        for child in self.children_of(command):
            yield child
            yield from self.walk(child)

    def leaf_commands(self) -> list[Command]:
        return [self.commands[i] for i in self.leaves]

    def global_attribute(self, name: str) -> AttributeValue | None:
        for attr_name, value in self.global_attributes:
            if attr_name == name:
                return value
        return None

    def attribute_kind(self, name: str) -> AttributeKind | None:
        for definition in self.attribute_table:
            if definition.name == name:
                return definition.kind
        return None

    def find_topic(self, name: str) -> Topic | None:
        for topic in self.topics:
            if topic.name == name:
                return topic
        return None
