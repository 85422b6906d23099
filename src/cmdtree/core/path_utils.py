"""
Path and identifier utilities for cmdtree.

Command paths join name segments with `/`. Presentation identifiers are derived
from paths by splitting segments on `- _ . :` and capitalising the parts.
"""

import keyword
import re

from inflection import underscore

PATH_SEPARATOR = "/"

_IDENT_SEPARATORS = re.compile(r"[-_.:]+")
_VALID_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def join_path(segments: list[str] | tuple[str, ...]) -> str:
    """Join name segments into a full command path."""
    return PATH_SEPARATOR.join(segments)


def split_path(path: str) -> list[str]:
    """Split a full command path into its segments."""
    return [segment for segment in path.split(PATH_SEPARATOR) if segment]


def split_ident(name: str) -> list[str]:
    """Split a name on identifier separators, dropping empty parts."""
    return [part for part in _IDENT_SEPARATORS.split(name) if part]


def field_name(name: str) -> str:
    """
    Convert one name segment to a capitalised identifier part.

    Params:
        name: A single command name segment, e.g. "init-db"

    Returns:
        "InitDb" for "init-db"; "X" when nothing usable remains; an "X"
        prefix when the result would start with a digit
    """
    out = "".join(part[:1].upper() + part[1:] for part in split_ident(name))
    if not out:
        return "X"
    if out[0].isdigit():
        return "X" + out
    return out


def canonical_name(path: str) -> str:
    """Presentation identifier for a full command path ("a/b-c" -> "ABC")."""
    return "".join(field_name(segment) for segment in split_path(path))


def python_name(name: str) -> str:
    """
    Derive a snake_case Python identifier from a declared name.

    Used for bundle field names and handler method names. Keywords receive a
    trailing underscore.
    """
    out = underscore("_".join(split_ident(name)).replace("/", "_"))
    out = re.sub(r"[^0-9A-Za-z_]", "_", out).strip("_")
    if not out:
        out = "x"
    if out[0].isdigit():
        out = "x_" + out
    if keyword.iskeyword(out):
        out += "_"
    return out


def unique_names(names: list[str] | tuple[str, ...], reserved: set[str] | None = None) -> list[str]:
    """
    Make names unique, keeping order.

    The first occurrence keeps its name; later repeats get `_2`, `_3`, ...
    skipping anything already taken or reserved.

    Params:
        names: Names in declaration order, repeats allowed
        reserved: Names that must not be produced

    Returns:
        One unique name per input name
    """
    taken = set(reserved or ())
    out = []
    for name in names:
        candidate = name
        n = 1
        while candidate in taken:
            n += 1
            candidate = f"{name}_{n}"
        taken.add(candidate)
        out.append(candidate)
    return out


def is_valid_identifier(name: str) -> bool:
    """Check a namespace identifier against `[A-Za-z_][A-Za-z0-9_]*`."""
    return bool(_VALID_IDENTIFIER.match(name))
