"""Typed Python client bindings generator for D-Bus interfaces."""

from .introspect import IntrospectionError, load_interfaces, parse_introspection
from .models import Arg, Interface, Method, Property, Signal
from .printer import GenerationError, render_module, write_module

__all__ = [
    "Arg",
    "GenerationError",
    "Interface",
    "IntrospectionError",
    "Method",
    "Property",
    "Signal",
    "load_interfaces",
    "parse_introspection",
    "render_module",
    "write_module",
]
