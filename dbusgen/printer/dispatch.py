"""Cross-interface signal registry and the generated lookup function."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Set

from .. import naming
from ..models import Interface, Signal
from .emitter import Emitter
from .errors import GenerationError


@dataclass(frozen=True)
class RegisteredSignal:
    qualified_name: str
    interface: Interface
    signal: Signal
    event_type: str

    @property
    def body_type(self) -> str:
        return self.event_type + "Body"


class SignalRegistry:
    """Signals collected during one generation run, keyed by qualified name.

    Entries keep registration order so repeated runs print identical output.
    Event class names are allocated here; ``reserved`` holds module-level
    names already claimed by other declarations of the run.
    """

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._entries: Dict[str, RegisteredSignal] = {}
        self._taken: Set[str] = set(reserved)

    def register(self, iface: Interface, signal: Signal) -> RegisteredSignal:
        qualified_name = f"{iface.name}.{signal.name}"
        if qualified_name in self._entries:
            raise GenerationError(f"signal {qualified_name} is declared more than once")
        entry = RegisteredSignal(
            qualified_name=qualified_name,
            interface=iface,
            signal=signal,
            event_type=self._allocate(iface.event_type(signal)),
        )
        self._entries[qualified_name] = entry
        return entry

    def get(self, qualified_name: str) -> Optional[RegisteredSignal]:
        return self._entries.get(qualified_name)

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._entries

    def __iter__(self) -> Iterator[RegisteredSignal]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def _allocate(self, base: str) -> str:
        # The payload class name must be free as well.
        event_type = base
        counter = 1
        while event_type in self._taken or event_type + "Body" in self._taken:
            event_type = f"{base}_{counter}"
            counter += 1
        self._taken.update((event_type, event_type + "Body"))
        return event_type


def reserved_names(ifaces: Iterable[Interface]) -> Set[str]:
    """Return the module-level names claimed before any event class is named."""
    names = set(naming.MODULE_NAMES)
    for iface in ifaces:
        names.update((iface.identifier, iface.factory))
    return names


def write_dispatch(buf: Emitter, registry: SignalRegistry) -> None:
    """Write the shared ``Signal`` protocol and ``lookup_signal``."""
    entries = [
        {
            "qualified_name": entry.qualified_name,
            "event_type": entry.event_type,
            "body_type": entry.body_type,
            "fields": [{"name": arg.name, "type": arg.type} for arg in entry.signal.args],
        }
        for entry in registry
    ]
    buf.write_formatted("dispatch.py.j2", entries=entries)
