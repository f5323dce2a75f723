"""Identifier derivation for generated Python declarations."""

from __future__ import annotations

import keyword
import re
from typing import Iterable, List, Optional, Set

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_REPEATED_UNDERSCORES = re.compile(r"_+")

# Names generated method bodies rely on.
RESERVED_NAMES = frozenset({"self", "runtime"})

# Module-level names bound by the generated preamble and dispatch section.
MODULE_NAMES = frozenset(
    {
        "annotations",
        "dataclass",
        "Dict",
        "List",
        "Optional",
        "Protocol",
        "Tuple",
        "runtime",
        "Signal",
        "lookup_signal",
    }
)

# Attributes every generated proxy class defines itself.
PROXY_ATTRIBUTES = frozenset({"__init__", "_object"})


def identifier(name: str, *, fallback: str = "_") -> str:
    """Return ``name`` rewritten as a legal Python identifier."""
    cleaned = _INVALID_CHARS.sub("_", name)
    if not cleaned:
        cleaned = fallback
    if cleaned[0].isdigit():
        cleaned = "_" + cleaned
    if keyword.iskeyword(cleaned):
        cleaned += "_"
    return cleaned


def snake_case(name: str) -> str:
    """Convert a CamelCase D-Bus member name to snake_case."""
    spaced = _CAMEL_BOUNDARY.sub("_", _INVALID_CHARS.sub("_", name))
    return _REPEATED_UNDERSCORES.sub("_", spaced).strip("_").lower()


def strip_interface_prefix(name: str, prefix: Optional[str]) -> str:
    if prefix and name.startswith(prefix) and len(name) > len(prefix):
        return name[len(prefix):].lstrip(".")
    return name


def interface_identifier(name: str, prefix: Optional[str] = None) -> str:
    """``org.example.Demo`` -> ``OrgExampleDemo``."""
    parts = [part for part in strip_interface_prefix(name, prefix).split(".") if part]
    joined = "".join(part[:1].upper() + part[1:] for part in parts)
    ident = identifier(joined, fallback="Interface")
    if ident in MODULE_NAMES:
        ident += "_"
    return ident


def factory_identifier(name: str, prefix: Optional[str] = None) -> str:
    """``org.example.Demo`` -> ``new_org_example_demo``."""
    parts = [snake_case(part) for part in strip_interface_prefix(name, prefix).split(".")]
    return identifier("new_" + "_".join(part for part in parts if part))


def member_identifier(name: str) -> str:
    return identifier(name, fallback="member")


def property_accessor(name: str) -> str:
    return identifier("get_" + (snake_case(name) or "property"))


def argument_identifier(name: Optional[str], position: int) -> str:
    """Return the local binding name for an argument at ``position``."""
    if not name:
        return f"arg{position}"
    ident = identifier(name, fallback=f"arg{position}")
    if ident in RESERVED_NAMES:
        ident += "_"
    return ident


def argument_identifiers(names: Iterable[Optional[str]]) -> List[str]:
    """Derive binding names for a whole argument list, keeping them unique."""
    result: List[str] = []
    seen: set[str] = set()
    for position, name in enumerate(names):
        ident = argument_identifier(name, position)
        while ident in seen:
            ident = f"{ident}_{position}"
        seen.add(ident)
        result.append(ident)
    return result


def unique_identifier(name: str, taken: Set[str]) -> str:
    """Return ``name`` or the first free ``name_<n>``, and mark it taken.

    D-Bus member names are case-sensitive while derived identifiers are
    not always, so ``Foo`` and ``foo`` both map to ``get_foo``.
    """
    candidate = name
    counter = 1
    while candidate in taken:
        candidate = f"{name}_{counter}"
        counter += 1
    taken.add(candidate)
    return candidate


__all__ = [
    "MODULE_NAMES",
    "PROXY_ATTRIBUTES",
    "RESERVED_NAMES",
    "argument_identifier",
    "argument_identifiers",
    "factory_identifier",
    "identifier",
    "interface_identifier",
    "member_identifier",
    "property_accessor",
    "snake_case",
    "strip_interface_prefix",
    "unique_identifier",
]
