"""
Configuration for the cmdtree compiler and dispatch engine.

Holds the implicit help flag and the options that control where compiled
artifacts are written.
"""

from attrs import frozen

from cmdtree.core.nodes import Flag
from cmdtree.core.types import BOOL

HELP_FLAG = Flag(name="help", kind=BOOL, description="Show help information", short="h")


@frozen
class CompilerOptions:
    """
    Options for compiling a declaration file to artifacts.

    Params:
        source_suffix: Required extension of declaration files
        tree_suffix: Suffix of the contract artifact written beside the source
        bundle_suffix: Suffix of the bundle-schema artifact written beside the source
        indent: JSON indentation of written artifacts
    """

    source_suffix: str = ".cdl"
    tree_suffix: str = ".tree.json"
    bundle_suffix: str = ".bundles.json"
    indent: int | None = 2

    @classmethod
    def from_dict(cls, config: dict | None = None) -> "CompilerOptions":
        """Factory method to create options from a dict with defaults."""
        if config is None:
            config = {}
        return cls(**config)
