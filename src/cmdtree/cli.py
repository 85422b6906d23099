"""Compiler command line: declaration file to JSON artifacts."""

import argparse
import json
import logging
import sys
from pathlib import Path

from cmdtree.compiler import compile_source
from cmdtree.config import CompilerOptions
from cmdtree.core.path_utils import is_valid_identifier
from cmdtree.dynamic import bundle_models, bundle_schemas
from cmdtree.exceptions import DeclarationError
from cmdtree.structure.contract import build_contract, contract_to_dict, tree_to_dict

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None, options: CompilerOptions | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    options = options or CompilerOptions()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source = Path(args.source)
    if source.suffix != options.source_suffix:
        print(f"error: source must have a {options.source_suffix} extension: {source}", file=sys.stderr)
        return 2
    if not is_valid_identifier(args.namespace):
        print(f"error: invalid namespace: {args.namespace!r}", file=sys.stderr)
        return 1

    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {source}: {exc}", file=sys.stderr)
        return 1

    try:
        tree = compile_source(text, source_name=source.name)
        contract = build_contract(tree)
        models = bundle_models(contract)
    except DeclarationError as exc:
        print(f"{source}:{exc.line}: {exc.message}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"{source}: {exc}", file=sys.stderr)
        return 1

    tree_data = contract_to_dict(contract, args.namespace)
    tree_data["commands"] = tree_to_dict(tree)
    bundle_data = {"namespace": args.namespace, "bundles": bundle_schemas(models)}

    base = source.with_suffix("")
    outputs = [
        (base.with_name(base.name + options.tree_suffix), tree_data),
        (base.with_name(base.name + options.bundle_suffix), bundle_data),
    ]
    try:
        for path, data in outputs:
            path.write_text(json.dumps(data, indent=options.indent) + "\n", encoding="utf-8")
            logger.debug("wrote %s", path)
    except OSError as exc:
        print(f"error: cannot write artifacts: {exc}", file=sys.stderr)
        return 1

    for path, _ in outputs:
        print(path.resolve())
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdtree",
        description="Compile a command-tree declaration into JSON artifacts.",
    )
    parser.add_argument("source", help="Declaration file (.cdl).")
    parser.add_argument("namespace", help="Namespace identifier recorded in the artifacts.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser
