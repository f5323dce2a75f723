"""Proxy declarations for a single interface."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ..models import Arg, Interface, Method, Property
from ..signatures import annotation
from .emitter import Emitter, literal


def write_interface(buf: Emitter, iface: Interface) -> None:
    """Write the factory, proxy class, and member bindings of ``iface``."""
    buf.write_formatted(
        "interface.py.j2",
        iface=iface,
        methods=[_method_context(iface, method) for method in iface.methods],
        properties=[
            _property_context(prop) for prop in iface.properties if prop.readable
        ],
    )


def _method_context(iface: Interface, method: Method) -> Dict[str, str]:
    return {
        "name": method.name,
        "identifier": method.identifier,
        "qualified": f"{iface.name}.{method.name}",
        "params": join_params(method.in_args),
        "returns": join_return_annotation(method.out_args),
        "call_args": "".join(", " + arg.name for arg in method.in_args),
        "targets": join_store_targets(method.out_args),
        "signatures": join_signatures(method.out_args),
        "result": join_arg_names(method.out_args),
    }


def _property_context(prop: Property) -> Dict[str, str]:
    return {
        "name": prop.name,
        "identifier": prop.identifier,
        "annotation": annotation(prop.arg.type),
        "binding": prop.arg.name,
        "type": prop.arg.type,
    }


def join_params(args: Sequence[Arg]) -> str:
    params: List[str] = ["self"]
    params.extend(f"{arg.name}: {annotation(arg.type)}" for arg in args)
    return ", ".join(params)


def join_return_annotation(args: Sequence[Arg]) -> str:
    if not args:
        return "None"
    if len(args) == 1:
        return annotation(args[0].type)
    return "Tuple[" + ", ".join(annotation(arg.type) for arg in args) + "]"


def join_arg_names(args: Sequence[Arg]) -> str:
    return ", ".join(arg.name for arg in args)


def join_store_targets(args: Sequence[Arg]) -> str:
    if len(args) == 1:
        return f"({args[0].name},)"
    return join_arg_names(args)


def join_signatures(args: Sequence[Arg]) -> str:
    return ", ".join(literal(arg.type) for arg in args)
