"""
Tests for the declaration lexer.

Covers token classification, line tracking across comments and block
strings, block dedenting, and lexical error tokens.
"""

import pytest

from cmdtree.parsing.lexer import Lexer, TokenKind, normalize_block, tokenize


def kinds(source):
    return [token.kind for token in tokenize(source)]


class TestTokenClassification:
    """Tests for the kinds of tokens produced."""

    def test_command_statement(self):
        assert kinds('cmd project "Projects"') == [
            TokenKind.IDENTIFIER,
            TokenKind.IDENTIFIER,
            TokenKind.STRING,
            TokenKind.EOF,
        ]

    def test_attribute_statement(self):
        tokens = tokenize("attr retries = 42")
        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER,
            TokenKind.IDENTIFIER,
            TokenKind.EQUALS,
            TokenKind.NUMBER,
            TokenKind.EOF,
        ]
        assert tokens[3].value == "42"

    @pytest.mark.parametrize("ident", ["dry-run", "a/b", ".hidden", "x_1", "v2.0"])
    def test_identifier_characters(self, ident):
        tokens = tokenize(ident)
        assert tokens[0].kind is TokenKind.IDENTIFIER
        assert tokens[0].value == ident

    def test_string_value_excludes_quotes(self):
        token = tokenize('"Show status"')[0]
        assert token.kind is TokenKind.STRING
        assert token.value == "Show status"

    def test_empty_source(self):
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.EOF
        assert tokens[0].line == 1


class TestLineTracking:
    """Tests for 1-based line numbers on tokens."""

    def test_comments_are_skipped(self):
        tokens = tokenize("cmd\n# comment line\nflag # trailing\n")
        assert [t.value for t in tokens[:2]] == ["cmd", "flag"]
        assert tokens[0].line == 1
        assert tokens[1].line == 3

    def test_block_string_reports_start_line(self):
        tokens = tokenize('text """\n    one\n    two\n"""\nnext')
        assert tokens[1].kind is TokenKind.STRING
        assert tokens[1].line == 1
        assert tokens[2].value == "next"
        assert tokens[2].line == 5

    def test_block_string_reports_end_line(self):
        tokens = tokenize('flag v bool """\n    Verbose\n    output\n""" v')
        assert tokens[3].line == 1
        assert tokens[3].end_line == 4
        assert tokens[4].line == 4

    def test_single_line_token_ends_where_it_starts(self):
        token = tokenize('\n"x"')[0]
        assert token.end_line == token.line == 2


class TestBlockStrings:
    """Tests for triple-quoted string normalisation."""

    def test_block_is_dedented(self):
        token = tokenize('"""\n    first\n      nested\n"""')[0]
        assert token.value == "first\n  nested"

    def test_normalize_block_strips_blank_edges(self):
        assert normalize_block("\n\n  a\n  b\n\n") == "a\nb"

    def test_single_line_block(self):
        assert tokenize('"""inline"""')[0].value == "inline"


class TestLexicalErrors:
    """Tests for ERROR tokens."""

    def test_unexpected_character(self):
        tokens = tokenize("cmd @")
        assert tokens[-1].kind is TokenKind.ERROR
        assert tokens[-1].value == "unexpected character: '@'"

    def test_identifier_cannot_start_with_underscore(self):
        assert tokenize("_x")[0].kind is TokenKind.ERROR

    def test_unterminated_string(self):
        token = tokenize('flag v bool "Verbose')[-1]
        assert token.kind is TokenKind.ERROR
        assert token.value == "unterminated string"

    def test_newline_inside_single_line_string(self):
        token = tokenize('"first\nsecond"')[0]
        assert token.kind is TokenKind.ERROR
        assert token.value == "unterminated string"
        assert token.line == 1

    def test_unterminated_block_string(self):
        token = tokenize('text """\nnever closed\n')[-1]
        assert token.kind is TokenKind.ERROR
        assert token.value == "unterminated multiline string"
        assert token.line == 1

    def test_iteration_stops_at_error(self):
        tokens = tokenize("a @ b")
        assert [t.kind for t in tokens] == [TokenKind.IDENTIFIER, TokenKind.ERROR]


class TestLexerReset:
    """Tests for restarting a lexer."""

    def test_reset_restarts_stream(self):
        lexer = Lexer("cmd run")
        first = list(lexer)
        lexer.reset()
        assert list(lexer) == first
