"""
Declaration tree structures built by the parser.

Commands live in an arena (`Declaration.commands`) and refer to each other by
index, so the parser's attachment context never holds raw references into the
tree. Leaf values (flags, arguments, topics) are immutable records.
"""

from dataclasses import dataclass, field

from attrs import frozen

from cmdtree.core.types import BOOL, AttributeValue


@frozen
class Flag:
    """A boolean or string option, global or local to one command."""

    name: str
    kind: str
    description: str
    short: str | None = None
    line: int = 0

    @property
    def is_bool(self) -> bool:
        return self.kind == BOOL

    @property
    def long_form(self) -> str:
        return f"--{self.name}"

    @property
    def short_form(self) -> str | None:
        return f"-{self.short}" if self.short else None

    def matches(self, token: str) -> bool:
        """Check whether a command-line token names this flag."""
        return token == self.long_form or (
            self.short is not None and token == self.short_form
        )


@frozen
class Argument:
    """A positional argument; its kind is advisory only."""

    name: str
    kind: str
    description: str


@frozen
class Topic:
    """A free-standing help topic."""

    name: str
    description: str
    text: str = ""


@dataclass
class CommandDecl:
    """A command node as declared; mutable until the resolver freezes it."""

    index: int
    name: str
    parent: int | None = None
    description: str = ""
    flags: list[Flag] = field(default_factory=list)
    arguments: list[Argument] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    attributes: dict[str, AttributeValue] = field(default_factory=dict)
    attribute_lines: dict[str, int] = field(default_factory=dict)
    children: list[int] = field(default_factory=list)
    line: int = 0


@dataclass
class Declaration:
    """
    Result of parsing one declaration source.

    Params:
        commands: Arena of every command, addressed by `CommandDecl.index`
        roots: Indices of top-level commands in declaration order
        global_flags: Flags declared outside any command
        global_attributes: Attribute defaults declared outside any command
        topics: Help topics in declaration order
        app_name: Binary name from the `name` statement
        tagline: One-line application summary from the `name` statement
    """

    commands: list[CommandDecl] = field(default_factory=list)
    roots: list[int] = field(default_factory=list)
    global_flags: list[Flag] = field(default_factory=list)
    global_attributes: dict[str, AttributeValue] = field(default_factory=dict)
    global_attribute_lines: dict[str, int] = field(default_factory=dict)
    topics: list[Topic] = field(default_factory=list)
    app_name: str | None = None
    tagline: str | None = None

    def children_of(self, parent: int | None) -> list[int]:
        """Child indices of a command, or the roots for `None`."""
        if parent is None:
            return self.roots
        return self.commands[parent].children

    def find_child(self, parent: int | None, name: str) -> int | None:
        """Index of the child named `name` under `parent`, if any."""
        for index in self.children_of(parent):
            if self.commands[index].name == name:
                return index
        return None

    def add_command(self, name: str, parent: int | None, line: int = 0) -> int:
        """Append a new command to the arena and link it under `parent`."""
        index = len(self.commands)
        self.commands.append(CommandDecl(index=index, name=name, parent=parent, line=line))
        self.children_of(parent).append(index)
        return index

    def walk(self, parent: int | None = None):
        """Yield command indices depth-first in declaration order."""
        for index in self.children_of(parent):
            yield index
            yield from self.walk(index)
