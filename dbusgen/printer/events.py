"""Typed event declarations for the signals of a single interface."""

from __future__ import annotations

from ..models import Interface
from ..signatures import annotation
from .dispatch import SignalRegistry
from .emitter import Emitter


def write_events(buf: Emitter, iface: Interface, registry: SignalRegistry) -> None:
    """Register each signal, then write its payload and event classes."""
    for sig in iface.signals:
        entry = registry.register(iface, sig)
        buf.write_formatted(
            "signal.py.j2",
            iface=iface,
            signal=sig,
            event_type=entry.event_type,
            body_type=entry.body_type,
            fields=[
                {"name": arg.name, "annotation": annotation(arg.type)} for arg in sig.args
            ],
        )
