"""Front end: declaration text or file to a resolved command tree."""

import logging
from pathlib import Path

from cmdtree.core.tree import ResolvedTree
from cmdtree.parsing.parser import parse_declaration
from cmdtree.structure.resolver import resolve

logger = logging.getLogger(__name__)


def compile_source(source: str, source_name: str | None = None) -> ResolvedTree:
    """
    Lex, parse and resolve declaration text.

    Params:
        source: Declaration language text
        source_name: Optional file name used in error messages

    Returns:
        The immutable resolved tree

    Raises:
        DeclarationError: On the first lexical, syntactic or semantic failure
    """
    tree = resolve(parse_declaration(source, source_name))
    logger.debug("compiled %s", source_name or "<string>")
    return tree


def compile_file(path: str | Path) -> ResolvedTree:
    """Read and compile a declaration file."""
    path = Path(path)
    return compile_source(path.read_text(encoding="utf-8"), source_name=path.name)
