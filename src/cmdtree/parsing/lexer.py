"""
Lexer for the cmdtree declaration language.

Turns declaration text into a forward-only stream of classified tokens. Lexical
faults are reported as ERROR tokens carrying the line and a message; the parser
decides how to surface them.
"""

import textwrap
from collections.abc import Iterator
from enum import Enum

from attrs import field, frozen


class TokenKind(Enum):
    """Classification of a lexical token."""

    ERROR = "error"
    EOF = "end of input"
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"
    EQUALS = "'='"


@frozen
class Token:
    """A single token; `line` and `end_line` are the 1-based lines where it starts and ends."""

    kind: TokenKind
    value: str
    line: int
    end_line: int = field()

    @end_line.default
    def _end_line_default(self) -> int:
        return self.line

    def __str__(self) -> str:
        if self.kind is TokenKind.EOF:
            return "end of input"
        return self.value


_WHITESPACE = " \t\r\f\v"
_TRIPLE_QUOTE = '"""'


def _is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_identifier_start(ch: str) -> bool:
    return _is_alpha(ch) or ch in "/."


def _is_identifier_char(ch: str) -> bool:
    return _is_alpha(ch) or _is_digit(ch) or ch in "_-/."


def normalize_block(raw: str) -> str:
    """
    Normalise the body of a triple-quoted string.

    Leading and trailing blank lines are dropped and the common indentation is
    removed, so blocks can be indented along with the surrounding declaration.
    """
    lines = raw.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return textwrap.dedent("\n".join(lines))


class Lexer:
    """Restartable, forward-only tokenizer over an in-memory source."""

    def __init__(self, source: str):
        self.source = source
        self.reset()

    def reset(self) -> None:
        """Restart tokenization from the beginning of the source."""
        self.pos = 0
        self.line = 1

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF or the first ERROR."""
        while True:
            token = self.next_token()
            yield token
            if token.kind in (TokenKind.EOF, TokenKind.ERROR):
                return

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace_and_comments()

        if self.pos >= len(self.source):
            return Token(TokenKind.EOF, "", self.line)

        ch = self.source[self.pos]
        if ch == '"':
            return self._read_string()
        if ch == "=":
            self.pos += 1
            return Token(TokenKind.EQUALS, "=", self.line)
        if _is_digit(ch):
            return self._read_while(TokenKind.NUMBER, _is_digit)
        if _is_identifier_start(ch):
            return self._read_while(TokenKind.IDENTIFIER, _is_identifier_char)

        self.pos += 1
        return Token(TokenKind.ERROR, f"unexpected character: {ch!r}", self.line)

    def _skip_whitespace_and_comments(self) -> None:
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch == "\n":
                self.line += 1
                self.pos += 1
            elif ch in _WHITESPACE:
                self.pos += 1
            elif ch == "#":
                end = self.source.find("\n", self.pos)
                self.pos = len(self.source) if end == -1 else end
            else:
                return

    def _read_while(self, kind: TokenKind, predicate) -> Token:
        start = self.pos
        while self.pos < len(self.source) and predicate(self.source[self.pos]):
            self.pos += 1
        return Token(kind, self.source[start : self.pos], self.line)

    def _read_string(self) -> Token:
        if self.source.startswith(_TRIPLE_QUOTE, self.pos):
            return self._read_block_string()

        start_line = self.line
        self.pos += 1
        start = self.pos
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch == '"':
                value = self.source[start : self.pos]
                self.pos += 1
                return Token(TokenKind.STRING, value, start_line)
            if ch == "\n":
                break
            self.pos += 1
        return Token(TokenKind.ERROR, "unterminated string", start_line)

    def _read_block_string(self) -> Token:
        start_line = self.line
        self.pos += len(_TRIPLE_QUOTE)
        end = self.source.find(_TRIPLE_QUOTE, self.pos)
        if end == -1:
            self.line += self.source.count("\n", self.pos)
            self.pos = len(self.source)
            return Token(TokenKind.ERROR, "unterminated multiline string", start_line)
        raw = self.source[self.pos : end]
        self.line += raw.count("\n")
        self.pos = end + len(_TRIPLE_QUOTE)
        return Token(TokenKind.STRING, normalize_block(raw), start_line, self.line)


def tokenize(source: str) -> list[Token]:
    """Tokenize a whole source; the last token is EOF or ERROR."""
    return list(Lexer(source))
