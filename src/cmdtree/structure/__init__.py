"""
cmdtree structure components.

This package provides semantic resolution of parsed declarations and the
emitter contract derived from a resolved tree.
"""

from cmdtree.structure.contract import (
    HELP_HANDLER,
    EmitterContract,
    LeafShape,
    build_contract,
    contract_to_dict,
    tree_to_dict,
)
from cmdtree.structure.resolver import (
    attribute_or_default,
    collect_attribute_kinds,
    resolve,
    resolve_attribute,
    validate_flags,
)

__all__ = [
    "EmitterContract",
    "HELP_HANDLER",
    "LeafShape",
    "attribute_or_default",
    "build_contract",
    "collect_attribute_kinds",
    "contract_to_dict",
    "resolve",
    "resolve_attribute",
    "tree_to_dict",
    "validate_flags",
]
