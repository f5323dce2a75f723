"""D-Bus type signature parsing and Python type mapping."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple


class SignatureError(ValueError):
    """Raised when a D-Bus type signature is malformed."""


INTEGER_RANGES = {
    "y": (0, 2**8 - 1),
    "n": (-(2**15), 2**15 - 1),
    "q": (0, 2**16 - 1),
    "i": (-(2**31), 2**31 - 1),
    "u": (0, 2**32 - 1),
    "x": (-(2**63), 2**63 - 1),
    "t": (0, 2**64 - 1),
    "h": (0, 2**32 - 1),
}
BASIC_CODES = frozenset("ybnqiuxtdhsog")

_ANNOTATIONS = {
    "b": "bool",
    "d": "float",
    "s": "str",
    "o": "ObjectPath",
    "g": "Signature",
    "v": "Variant",
}
_RUNTIME_TYPES = frozenset({"ObjectPath", "Signature", "Variant"})
_MAX_DEPTH = 64


@dataclass(frozen=True)
class TypeNode:
    """One complete D-Bus type.

    ``code`` is the basic type code, ``v``, ``a`` for arrays, ``(`` for
    structs or ``{`` for dict entries. Containers carry their element types
    in ``children``.
    """

    code: str
    children: Tuple["TypeNode", ...] = ()

    @property
    def signature(self) -> str:
        if self.code == "a":
            return "a" + self.children[0].signature
        if self.code == "(":
            return "(" + "".join(child.signature for child in self.children) + ")"
        if self.code == "{":
            return "{" + "".join(child.signature for child in self.children) + "}"
        return self.code

    @property
    def is_dict(self) -> bool:
        return self.code == "a" and self.children[0].code == "{"


class _Parser:
    def __init__(self, signature: str) -> None:
        self.signature = signature
        self.pos = 0

    def parse_all(self) -> List[TypeNode]:
        nodes: List[TypeNode] = []
        while self.pos < len(self.signature):
            nodes.append(self.parse_one(0))
        return nodes

    def parse_one(self, depth: int) -> TypeNode:
        if depth > _MAX_DEPTH:
            raise SignatureError(f"signature {self.signature!r} is nested too deeply")
        if self.pos >= len(self.signature):
            raise SignatureError(f"signature {self.signature!r} ends unexpectedly")
        code = self.signature[self.pos]
        self.pos += 1
        if code in BASIC_CODES or code == "v":
            return TypeNode(code)
        if code == "a":
            if self.pos < len(self.signature) and self.signature[self.pos] == "{":
                self.pos += 1
                return TypeNode("a", (self._parse_dict_entry(depth + 1),))
            return TypeNode("a", (self.parse_one(depth + 1),))
        if code == "(":
            children: List[TypeNode] = []
            while self.pos < len(self.signature) and self.signature[self.pos] != ")":
                children.append(self.parse_one(depth + 1))
            if self.pos >= len(self.signature):
                raise SignatureError(f"unterminated struct in {self.signature!r}")
            self.pos += 1
            if not children:
                raise SignatureError(f"empty struct in {self.signature!r}")
            return TypeNode("(", tuple(children))
        raise SignatureError(
            f"unexpected {code!r} at offset {self.pos - 1} in {self.signature!r}"
        )

    def _parse_dict_entry(self, depth: int) -> TypeNode:
        key = self.parse_one(depth)
        if key.code not in BASIC_CODES:
            raise SignatureError(f"dict key must be a basic type in {self.signature!r}")
        value = self.parse_one(depth)
        if self.pos >= len(self.signature) or self.signature[self.pos] != "}":
            raise SignatureError(f"unterminated dict entry in {self.signature!r}")
        self.pos += 1
        return TypeNode("{", (key, value))


@lru_cache(maxsize=512)
def parse_signature(signature: str) -> Tuple[TypeNode, ...]:
    """Split ``signature`` into its complete types."""
    return tuple(_Parser(signature).parse_all())


def parse_single(signature: str) -> TypeNode:
    """Parse a signature that must hold exactly one complete type."""
    nodes = parse_signature(signature)
    if len(nodes) != 1:
        raise SignatureError(
            f"expected a single complete type, got {len(nodes)} in {signature!r}"
        )
    return nodes[0]


def annotation(signature: str, *, qualifier: str = "runtime.") -> str:
    """Return the Python annotation used in generated code for ``signature``."""
    return _annotate(parse_single(signature), qualifier)


def _annotate(node: TypeNode, qualifier: str) -> str:
    if node.code in INTEGER_RANGES:
        return "int"
    if node.code in _ANNOTATIONS:
        name = _ANNOTATIONS[node.code]
        return qualifier + name if name in _RUNTIME_TYPES else name
    if node.code == "a":
        element = node.children[0]
        if element.code == "{":
            key, value = element.children
            return f"Dict[{_annotate(key, qualifier)}, {_annotate(value, qualifier)}]"
        if element.code == "y":
            return "bytes"
        return f"List[{_annotate(element, qualifier)}]"
    if node.code == "(":
        inner = ", ".join(_annotate(child, qualifier) for child in node.children)
        return f"Tuple[{inner}]"
    raise SignatureError(f"cannot annotate {node.signature!r}")


__all__ = [
    "BASIC_CODES",
    "INTEGER_RANGES",
    "SignatureError",
    "TypeNode",
    "annotation",
    "parse_signature",
    "parse_single",
]
