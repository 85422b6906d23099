"""
cmdtree - Declarative command trees compiled to dispatchable structures

cmdtree provides a small declaration language for hierarchical command-line
interfaces, a resolver producing an immutable command tree, and a dispatcher
that binds argument vectors to leaf commands.
"""

from importlib.metadata import version

from cmdtree.compiler import compile_file, compile_source
from cmdtree.core.tree import Command, ResolvedTree
from cmdtree.execution.dispatch import dispatch
from cmdtree.execution.engine import Engine

__version__ = version("cmdtree")

__all__ = [
    "__version__",
    "Command",
    "Engine",
    "ResolvedTree",
    "compile_file",
    "compile_source",
    "dispatch",
]
