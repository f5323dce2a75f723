"""Runtime support imported by generated D-Bus bindings.

Generated modules never talk to a bus directly. They call into a connection
object satisfying :class:`BusConnection` and receive raw notifications as
:class:`RawSignal` values. Every value crossing that boundary is decoded
against its declared D-Bus signature by :func:`convert`, so a reply or a
notification of the wrong shape surfaces as :class:`ConversionError` rather
than as a silently mistyped field.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, Tuple

from .signatures import INTEGER_RANGES, TypeNode, parse_single


class ConversionError(ValueError):
    """Raised when a transported value does not match its declared signature."""

    def __init__(self, message: str, *, signature: str, value: Any) -> None:
        super().__init__(message)
        self.signature = signature
        self.value = value


class ObjectPath(str):
    """A D-Bus object path such as ``/org/example/Demo``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"ObjectPath({str.__repr__(self)})"


class Signature(str):
    """A D-Bus type signature value."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Signature({str.__repr__(self)})"


@dataclass(frozen=True)
class Variant:
    """A value tagged with its D-Bus signature."""

    signature: str
    value: Any


@dataclass(frozen=True)
class RawSignal:
    """An untyped signal notification as delivered by the transport."""

    sender: str
    path: ObjectPath
    name: str
    body: Sequence[Any] = ()


class BusObject(Protocol):
    """Remote object handle provided by the transport."""

    def call(self, method: str, flags: int, *args: Any) -> Sequence[Any]:
        """Invoke ``method`` and return its output values in order.

        Transport failures are raised as exceptions and reach the caller of
        the generated binding unchanged.
        """


class BusConnection(Protocol):
    """Bus connection provided by the transport."""

    def object(self, dest: str, path: ObjectPath) -> BusObject:
        """Return a handle for the object at ``path`` owned by ``dest``."""


def convert(value: Any, signature: str) -> Any:
    """Check ``value`` against ``signature`` and return its Python form."""
    return _convert(value, parse_single(signature))


def store(reply: Sequence[Any], *signatures: str) -> Tuple[Any, ...]:
    """Convert a method reply into a tuple matching ``signatures``."""
    values = tuple(reply) if reply is not None else ()
    if len(values) != len(signatures):
        raise ConversionError(
            f"reply carries {len(values)} values, expected {len(signatures)}",
            signature="".join(signatures),
            value=reply,
        )
    return tuple(convert(value, sig) for value, sig in zip(values, signatures))


def extract(body: Sequence[Any], index: int, signature: str) -> Any:
    """Return the payload slot ``index`` of a signal body decoded as ``signature``."""
    if index >= len(body):
        raise ConversionError(
            f"signal body has no value at position {index}",
            signature=signature,
            value=body,
        )
    try:
        return convert(body[index], signature)
    except ConversionError as exc:
        raise ConversionError(
            f"position {index}: {exc}", signature=signature, value=body[index]
        ) from exc


def _convert(value: Any, node: TypeNode) -> Any:
    code = node.code
    if isinstance(value, Variant) and code != "v":
        value = value.value
    if code in INTEGER_RANGES:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _mismatch(value, node)
        low, high = INTEGER_RANGES[code]
        if not low <= value <= high:
            raise ConversionError(
                f"{value} is out of range for {code!r}", signature=code, value=value
            )
        return value
    if code == "b":
        if not isinstance(value, bool):
            raise _mismatch(value, node)
        return value
    if code == "d":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _mismatch(value, node)
        return float(value)
    if code in ("s", "o", "g"):
        if not isinstance(value, str):
            raise _mismatch(value, node)
        if code == "o":
            if not value.startswith("/"):
                raise ConversionError(
                    f"{value!r} is not an object path", signature=code, value=value
                )
            return ObjectPath(value)
        if code == "g":
            return Signature(value)
        return str(value)
    if code == "v":
        if not isinstance(value, Variant):
            raise _mismatch(value, node)
        return value
    if code == "a":
        return _convert_array(value, node)
    if code == "(":
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise _mismatch(value, node)
        if len(value) != len(node.children):
            raise ConversionError(
                f"struct {node.signature!r} needs {len(node.children)} fields, got {len(value)}",
                signature=node.signature,
                value=value,
            )
        return tuple(_convert(item, child) for item, child in zip(value, node.children))
    raise _mismatch(value, node)


def _convert_array(value: Any, node: TypeNode) -> Any:
    element = node.children[0]
    if element.code == "{":
        if not isinstance(value, Mapping):
            raise _mismatch(value, node)
        key_type, value_type = element.children
        return {
            _convert(key, key_type): _convert(item, value_type)
            for key, item in value.items()
        }
    if element.code == "y":
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return bytes(_convert(item, element) for item in value)
        raise _mismatch(value, node)
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise _mismatch(value, node)
    return [_convert(item, element) for item in value]


def _mismatch(value: Any, node: TypeNode) -> ConversionError:
    return ConversionError(
        f"{type(value).__name__} value {value!r} does not match {node.signature!r}",
        signature=node.signature,
        value=value,
    )


__all__ = [
    "BusConnection",
    "BusObject",
    "ConversionError",
    "ObjectPath",
    "RawSignal",
    "Signature",
    "Variant",
    "convert",
    "extract",
    "store",
]
