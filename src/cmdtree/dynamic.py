"""Runtime construction of Pydantic parameter-bundle models from an emitter contract.

Every leaf command gets a model with three nested parts:
    - `args`: one required string field per positional argument.
    - `flags`: one field per local flag (bool or string, zero-valued by default).
    - `globals`: the global flags shared by every leaf, the help flag included.

Field names are snake_case Python identifiers; the declared names are kept as
aliases, so bound values keyed by declared names validate directly. Repeated
argument names are keyed `name`, `name_2`, ... as dispatch binds them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, create_model

from cmdtree.core.nodes import Argument, Flag
from cmdtree.core.path_utils import python_name, unique_names
from cmdtree.core.tree import ResolvedTree
from cmdtree.structure.contract import EmitterContract, LeafShape, build_contract

_type_mapping: dict[str, type] = {
    "bool": bool,
    "string": str,
    "int": int,
}


class BundleModel(BaseModel):
    """Base class of every generated bundle model."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="forbid",
        protected_namespaces=(),
    )


def get_type(kind: str) -> type:
    """Resolve a declared kind name to the Python type representing it.

    Params:
        kind: "bool", "string" or "int".

    Returns:
        The Python type.

    Raises:
        ValueError: If the kind is not one of the supported kinds.
    """
    if kind not in _type_mapping:
        raise ValueError(f"Kind {kind} is not one of: {', '.join(_type_mapping)}")
    return _type_mapping[kind]


def field_name_for(declared: str, taken: set[str]) -> str:
    """Python field name for a declared name, unique among `taken`.

    Names of `BundleModel` attributes (`json`, `copy`, `model_config`, ...)
    get a trailing underscore; repeats get a numeric suffix.
    """
    name = python_name(declared)
    if hasattr(BundleModel, name):
        name += "_"
    return unique_names([name], reserved=taken)[0]


def _flags_model(name: str, flags: tuple[Flag, ...], doc: str) -> type[BundleModel]:
    fields: dict[str, tuple[Any, Any]] = {}
    for flag in flags:
        flag_type = get_type(flag.kind)
        fields[field_name_for(flag.name, set(fields))] = (
            flag_type,
            Field(default=flag_type(), alias=flag.name, description=flag.description),
        )
    return create_model(name, __base__=BundleModel, __doc__=doc, **fields)  # type: ignore[call-overload]


def _args_model(name: str, arguments: tuple[Argument, ...], doc: str) -> type[BundleModel]:
    fields: dict[str, tuple[Any, Any]] = {}
    keys = unique_names([argument.name for argument in arguments])
    for key, argument in zip(keys, arguments):
        # positional kinds are advisory; values stay strings
        fields[field_name_for(key, set(fields))] = (
            str,
            Field(alias=key, description=argument.description),
        )
    return create_model(name, __base__=BundleModel, __doc__=doc, **fields)  # type: ignore[call-overload]


def global_flags_model(contract: EmitterContract) -> type[BundleModel]:
    """Model of the global flags, help flag first."""
    return _flags_model("GlobalFlags", contract.global_flags, "Global flags shared by all commands.")


def bundle_model(leaf: LeafShape, globals_model: type[BundleModel]) -> type[BundleModel]:
    """Create the parameter-bundle model of one leaf command.

    Params:
        leaf: Leaf shape from the contract.
        globals_model: Shared model of the global flags.

    Returns:
        Model class named `<CanonicalName>Bundle`.
    """
    prefix = leaf.canonical_name
    args_model = _args_model(f"{prefix}Args", leaf.arguments, f"Arguments of {leaf.path}.")
    flags_model = _flags_model(f"{prefix}Flags", leaf.flags, f"Flags of {leaf.path}.")
    return create_model(  # type: ignore[call-overload]
        f"{prefix}Bundle",
        __base__=BundleModel,
        __doc__=f"Parameter bundle of {leaf.path}.",
        args=(args_model, Field(default_factory=args_model) if not leaf.arguments else ...),
        flags=(flags_model, Field(default_factory=flags_model)),
        globals=(globals_model, Field(default_factory=globals_model)),
    )


def bundle_models(
    source: ResolvedTree | EmitterContract,
) -> dict[str, type[BundleModel]]:
    """Bundle model of every leaf, keyed by full path, in path order.

    Params:
        source: Resolved tree, or a contract already derived from one.

    Returns:
        Mapping of leaf path to bundle model class.
    """
    contract = build_contract(source) if isinstance(source, ResolvedTree) else source
    globals_model = global_flags_model(contract)
    return {leaf.path: bundle_model(leaf, globals_model) for leaf in contract.leaves}


def bind_bundle(model: type[BundleModel], values: dict[str, dict[str, Any]]) -> BundleModel:
    """Validate bound values (`args`, `flags`, `globals`, keyed by declared names) into a model instance."""
    return model.model_validate(values)


def bundle_schemas(models: dict[str, type[BundleModel]]) -> dict[str, dict[str, Any]]:
    """JSON Schema of every bundle model, keyed by path."""
    return {path: model.model_json_schema() for path, model in models.items()}
