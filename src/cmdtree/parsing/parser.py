"""
Parser for the cmdtree declaration language.

Single-pass, lookahead-1 statement dispatch. Each statement starts with a
keyword; flags, arguments, attributes and examples attach to the command
selected by the most recent `cmd` statement (or to the global section), and
`text` attaches to the most recent `topic`. The first failure stops parsing.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from attrs import evolve

from cmdtree.core.nodes import Argument, Declaration, Flag, Topic
from cmdtree.core.types import AttributeValue
from cmdtree.exceptions import DeclarationSyntaxError, ErrorContext
from cmdtree.parsing.lexer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)


@dataclass
class ParseContext:
    """
    Per-compilation parser state.

    Params:
        declaration: Tree under construction
        current_command: Arena index of the command statements attach to
        current_topic: Index into `declaration.topics` that `text` attaches to
        source_name: Optional file name used in error context
    """

    declaration: Declaration = field(default_factory=Declaration)
    current_command: int | None = None
    current_topic: int | None = None
    source_name: str | None = None


class DeclarationParser:
    """Parser from declaration text to a `Declaration`."""

    def __init__(self, source: str, source_name: str | None = None):
        self.lexer = Lexer(source)
        self.ctx = ParseContext(source_name=source_name)
        self.token: Token = self.lexer.next_token()
        self._statements: dict[str, Callable[[Token], None]] = {
            "global": self._parse_global,
            "cmd": self._parse_command,
            "flag": self._parse_flag,
            "arg": self._parse_arg,
            "attr": self._parse_attr,
            "param": self._parse_attr,
            "name": self._parse_name,
            "example": self._parse_example,
            "topic": self._parse_topic,
            "text": self._parse_text,
        }

    def parse(self) -> Declaration:
        """
        Parse the whole source.

        Returns:
            The populated declaration tree

        Raises:
            DeclarationSyntaxError: On the first lexical or syntactic fault
        """
        while self.token.kind is not TokenKind.EOF:
            self._check_lexical(self.token)
            if self.token.kind is not TokenKind.IDENTIFIER:
                raise self._error("expected keyword", self.token, "a statement keyword")
            keyword = self.token
            handler = self._statements.get(keyword.value)
            if handler is None:
                raise self._error(
                    f"unknown keyword {keyword.value!r}",
                    keyword,
                    "one of " + ", ".join(sorted(self._statements)),
                )
            self._advance()
            handler(keyword)
            logger.debug("line %d: parsed %s statement", keyword.line, keyword.value)
        return self.ctx.declaration

    # Token helpers

    def _advance(self) -> Token:
        consumed = self.token
        self.token = self.lexer.next_token()
        return consumed

    def _check_lexical(self, token: Token) -> None:
        if token.kind is TokenKind.ERROR:
            raise self._error(token.value, token)

    def _error(
        self, message: str, token: Token, expected: str | None = None
    ) -> DeclarationSyntaxError:
        shown = None if token.kind in (TokenKind.EOF, TokenKind.ERROR) else token.value
        return DeclarationSyntaxError(
            message,
            ErrorContext(
                line=token.line,
                token=shown,
                expected=expected,
                source_name=self.ctx.source_name,
            ),
        )

    def _expect(self, kind: TokenKind, what: str) -> Token:
        """Consume a token of `kind` or fail with `expected <what>`."""
        self._check_lexical(self.token)
        if self.token.kind is not kind:
            raise self._error(f"expected {what}", self.token, what)
        return self._advance()

    def _optional(self, kind: TokenKind, line: int) -> Token | None:
        """Consume a trailing optional token only if it sits on `line`."""
        self._check_lexical(self.token)
        if self.token.kind is kind and self.token.line == line:
            return self._advance()
        return None

    def _require_command(self, keyword: Token) -> int:
        if self.ctx.current_command is None:
            raise self._error(f"{keyword.value!r} must follow a 'cmd'", keyword)
        return self.ctx.current_command

    # Statements

    def _parse_global(self, keyword: Token) -> None:
        self.ctx.current_command = None
        self.ctx.current_topic = None

    def _parse_command(self, keyword: Token) -> None:
        decl = self.ctx.declaration
        line = keyword.line
        path: list[str] = []
        while True:
            segment = self._optional(TokenKind.IDENTIFIER, line)
            if segment is None:
                break
            path.append(segment.value)
        if not path:
            raise self._error("expected command name or path", self.token, "command name")
        description = self._optional(TokenKind.STRING, line)

        current: int | None = None
        for segment in path:
            found = decl.find_child(current, segment)
            if found is None:
                found = decl.add_command(segment, current, line=line)
                logger.debug("line %d: created command %r", line, segment)
            current = found
        if description is not None:
            decl.commands[current].description = description.value
        self.ctx.current_command = current

    def _parse_flag(self, keyword: Token) -> None:
        name = self._expect(TokenKind.IDENTIFIER, "flag name")
        kind = self._expect(TokenKind.IDENTIFIER, "flag type")
        description = self._expect(TokenKind.STRING, "flag description")
        short = self._optional(TokenKind.IDENTIFIER, description.end_line)
        flag = Flag(
            name=name.value,
            kind=kind.value,
            description=description.value,
            short=short.value if short else None,
            line=keyword.line,
        )
        if self.ctx.current_command is None:
            self.ctx.declaration.global_flags.append(flag)
        else:
            self.ctx.declaration.commands[self.ctx.current_command].flags.append(flag)

    def _parse_arg(self, keyword: Token) -> None:
        index = self._require_command(keyword)
        name = self._expect(TokenKind.IDENTIFIER, "arg name")
        kind = self._expect(TokenKind.IDENTIFIER, "arg type")
        description = self._expect(TokenKind.STRING, "arg description")
        self.ctx.declaration.commands[index].arguments.append(
            Argument(name=name.value, kind=kind.value, description=description.value)
        )

    def _parse_attr(self, keyword: Token) -> None:
        name = self._expect(TokenKind.IDENTIFIER, f"{keyword.value} name")
        self._expect(TokenKind.EQUALS, f"'=' after {keyword.value} name")
        value = self._attribute_value()

        decl = self.ctx.declaration
        if self.ctx.current_command is None:
            decl.global_attributes[name.value] = value
            decl.global_attribute_lines[name.value] = keyword.line
        else:
            command = decl.commands[self.ctx.current_command]
            command.attributes[name.value] = value
            command.attribute_lines[name.value] = keyword.line

    def _attribute_value(self) -> AttributeValue:
        self._check_lexical(self.token)
        token = self.token
        expected = "bool, string or int value"
        if token.kind is TokenKind.STRING:
            value = AttributeValue.of(token.value)
        elif token.kind is TokenKind.NUMBER:
            try:
                value = AttributeValue.of(int(token.value))
            except ValueError:
                raise self._error(f"invalid number {token.value!r}", token, expected) from None
        elif token.kind is TokenKind.IDENTIFIER and token.value in ("true", "false"):
            value = AttributeValue.of(token.value == "true")
        else:
            raise self._error(f"expected {expected}", token, expected)
        self._advance()
        return value

    def _parse_name(self, keyword: Token) -> None:
        if self.ctx.current_command is not None:
            raise self._error("'name' must be under 'global'", keyword)
        decl = self.ctx.declaration
        if decl.app_name is not None:
            raise self._error("app name is already set", keyword)
        app_name = self._expect(TokenKind.STRING, "binary name string")
        tagline = self._expect(TokenKind.STRING, "tagline string")
        decl.app_name = app_name.value
        decl.tagline = tagline.value

    def _parse_example(self, keyword: Token) -> None:
        index = self._require_command(keyword)
        example = self._expect(TokenKind.STRING, "example string")
        self.ctx.declaration.commands[index].examples.append(example.value)

    def _parse_topic(self, keyword: Token) -> None:
        name = self._expect(TokenKind.IDENTIFIER, "topic name")
        description = self._expect(TokenKind.STRING, "topic description")
        topics = self.ctx.declaration.topics
        topics.append(Topic(name=name.value, description=description.value))
        self.ctx.current_topic = len(topics) - 1

    def _parse_text(self, keyword: Token) -> None:
        if self.ctx.current_topic is None:
            raise self._error("'text' must follow a 'topic'", keyword)
        text = self._expect(TokenKind.STRING, "text string")
        topics = self.ctx.declaration.topics
        topics[self.ctx.current_topic] = evolve(
            topics[self.ctx.current_topic], text=text.value
        )


def parse_declaration(source: str, source_name: str | None = None) -> Declaration:
    """
    Parse declaration text into a `Declaration`.

    Params:
        source: Declaration language text
        source_name: Optional file name used in error messages

    Returns:
        The unresolved declaration tree

    Raises:
        DeclarationSyntaxError: On the first lexical or syntactic fault
    """
    return DeclarationParser(source, source_name).parse()
