"""Python source printer for D-Bus interface models."""

from __future__ import annotations

from typing import Sequence, TextIO

from jinja2 import Environment

from ..logging import get_logger
from ..models import Interface
from ..signatures import SignatureError
from .declarations import write_interface
from .dispatch import RegisteredSignal, SignalRegistry, reserved_names, write_dispatch
from .emitter import Emitter, create_environment
from .errors import GenerationError
from .events import write_events
from .header import write_header
from .normalize import SourceNormalizer

logger = get_logger("printer")


def render_module(
    package: str,
    ifaces: Sequence[Interface],
    *,
    env: Environment | None = None,
    normalizer: SourceNormalizer | None = None,
) -> str:
    """Return the complete, normalized bindings module for ``ifaces``."""
    buf = Emitter(env)
    registry = SignalRegistry(reserved_names(ifaces))
    write_header(buf, package, ifaces)
    for iface in ifaces:
        logger.debug(
            "Printing %s (%d methods, %d properties, %d signals)",
            iface.name,
            len(iface.methods),
            len(iface.properties),
            len(iface.signals),
        )
        try:
            write_interface(buf, iface)
            write_events(buf, iface, registry)
        except SignatureError as exc:
            raise GenerationError(f"{iface.name}: {exc}") from exc
    if len(registry) > 0:
        write_dispatch(buf, registry)
    normalizer = normalizer or SourceNormalizer()
    return normalizer.normalize(buf.contents(), filename=f"<{package}>")


def write_module(
    out: TextIO,
    package: str,
    ifaces: Sequence[Interface],
    *,
    env: Environment | None = None,
) -> None:
    """Render the bindings module and write it to ``out`` in one piece."""
    out.write(render_module(package, ifaces, env=env))


__all__ = [
    "Emitter",
    "GenerationError",
    "RegisteredSignal",
    "SignalRegistry",
    "SourceNormalizer",
    "create_environment",
    "render_module",
    "write_module",
]
