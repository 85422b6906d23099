"""
cmdtree declaration parsing components.

This package provides the lexer and the statement parser that turn
declaration text into an unresolved `Declaration`.
"""

from cmdtree.parsing.lexer import Lexer, Token, TokenKind, tokenize
from cmdtree.parsing.parser import DeclarationParser, ParseContext, parse_declaration

__all__ = [
    "DeclarationParser",
    "Lexer",
    "ParseContext",
    "Token",
    "TokenKind",
    "parse_declaration",
    "tokenize",
]
