"""D-Bus introspection XML front-end producing the interface model."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from . import naming
from .logging import get_logger
from .models import Arg, Interface, Method, Property, Signal
from .signatures import SignatureError, parse_single

logger = get_logger("introspect")


class IntrospectionError(RuntimeError):
    """Raised when an introspection document cannot be turned into a model."""


def parse_introspection(
    document: str,
    *,
    strip_prefix: Optional[str] = None,
    source: str = "<string>",
) -> List[Interface]:
    """Parse one introspection document into interfaces, in document order."""
    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise IntrospectionError(f"{source}: malformed introspection XML: {exc}") from exc

    if root.tag not in ("node", "interface"):
        raise IntrospectionError(f"{source}: unexpected root element <{root.tag}>")

    elements = [root] if root.tag == "interface" else list(root.iter("interface"))
    return [_parse_interface(element, strip_prefix, source) for element in elements]


def load_interfaces(
    paths: Iterable[Path],
    *,
    strip_prefix: Optional[str] = None,
) -> List[Interface]:
    """Parse every file and merge the results, keeping first definitions."""
    merged: List[Interface] = []
    seen: set[str] = set()
    for path in paths:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise IntrospectionError(f"cannot read {path}: {exc}") from exc
        for iface in parse_introspection(text, strip_prefix=strip_prefix, source=str(path)):
            if iface.name in seen:
                logger.warning("Skipping duplicate interface %s in %s", iface.name, path)
                continue
            seen.add(iface.name)
            merged.append(iface)
    return merged


def filter_interfaces(
    ifaces: Sequence[Interface],
    *,
    only: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> List[Interface]:
    """Select interfaces by fnmatch patterns on their qualified names."""
    selected: List[Interface] = []
    for iface in ifaces:
        if only and not any(fnmatch(iface.name, pattern) for pattern in only):
            logger.debug("Interface %s not selected by --only", iface.name)
            continue
        if any(fnmatch(iface.name, pattern) for pattern in exclude):
            logger.debug("Interface %s excluded", iface.name)
            continue
        selected.append(iface)
    return selected


def _parse_interface(element: ET.Element, strip_prefix: Optional[str], source: str) -> Interface:
    name = _required_name(element, source)
    methods = [_parse_method(child, name, source) for child in element.findall("method")]
    properties = [_parse_property(child, name, source) for child in element.findall("property")]
    signals = [_parse_signal(child, name, source) for child in element.findall("signal")]
    return Interface(
        name=name,
        methods=methods,
        properties=properties,
        signals=signals,
        strip_prefix=strip_prefix,
    )


def _parse_method(element: ET.Element, iface: str, source: str) -> Method:
    name = _required_name(element, source, owner=iface)
    in_elements: List[ET.Element] = []
    out_elements: List[ET.Element] = []
    for arg in element.findall("arg"):
        direction = arg.get("direction", "in")
        if direction == "in":
            in_elements.append(arg)
        elif direction == "out":
            out_elements.append(arg)
        else:
            raise IntrospectionError(
                f"{source}: {iface}.{name} has an argument with direction {direction!r}"
            )
    # Inputs and outputs share one namespace in the generated method body.
    names = naming.argument_identifiers(arg.get("name") for arg in in_elements + out_elements)
    types = [_arg_type(arg, f"{iface}.{name}", source) for arg in in_elements + out_elements]
    args = [Arg(name=arg_name, type=arg_type) for arg_name, arg_type in zip(names, types)]
    return Method(name=name, in_args=args[: len(in_elements)], out_args=args[len(in_elements):])


def _parse_property(element: ET.Element, iface: str, source: str) -> Property:
    name = _required_name(element, source, owner=iface)
    access = element.get("access", "read")
    if access not in ("read", "write", "readwrite"):
        raise IntrospectionError(f"{source}: {iface}.{name} has access {access!r}")
    return Property(name=name, type=_arg_type(element, f"{iface}.{name}", source), access=access)


def _parse_signal(element: ET.Element, iface: str, source: str) -> Signal:
    name = _required_name(element, source, owner=iface)
    arg_elements = element.findall("arg")
    names = naming.argument_identifiers(arg.get("name") for arg in arg_elements)
    args = [
        Arg(name=arg_name, type=_arg_type(arg, f"{iface}.{name}", source))
        for arg_name, arg in zip(names, arg_elements)
    ]
    return Signal(name=name, args=args)


def _required_name(element: ET.Element, source: str, owner: Optional[str] = None) -> str:
    name = (element.get("name") or "").strip()
    if not name:
        where = f" in {owner}" if owner else ""
        raise IntrospectionError(f"{source}: <{element.tag}>{where} has no name")
    return name


def _arg_type(element: ET.Element, owner: str, source: str) -> str:
    signature = element.get("type")
    if not signature:
        raise IntrospectionError(f"{source}: {owner} has a {element.tag} without a type")
    try:
        parse_single(signature)
    except SignatureError as exc:
        raise IntrospectionError(f"{source}: {owner}: {exc}") from exc
    return signature


__all__ = [
    "IntrospectionError",
    "filter_interfaces",
    "load_interfaces",
    "parse_introspection",
]
