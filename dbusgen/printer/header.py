"""Generated-file banner and module preamble."""

from __future__ import annotations

from typing import Sequence

from ..models import Interface
from .emitter import Emitter

BANNER = "# Generated by dbusgen, don't edit!"


def write_header(buf: Emitter, package: str, ifaces: Sequence[Interface]) -> None:
    """Write the audit banner listing every interface member, then imports."""
    buf.write_line(BANNER)
    buf.write_line("#")
    for index, iface in enumerate(ifaces):
        if index != 0:
            buf.write_line("#")
        buf.write_line("# ", iface.name)
        if iface.methods:
            buf.write_line("#   Methods")
            for method in iface.methods:
                buf.write_line("#     ", method.name)
        if iface.properties:
            buf.write_line("#   Properties")
            for prop in iface.properties:
                buf.write_line("#     ", prop.name)
        if iface.signals:
            buf.write_line("#   Signals")
            for sig in iface.signals:
                buf.write_line("#     ", sig.name)
    buf.write_formatted("preamble.py.j2", package=package)
