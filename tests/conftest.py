from __future__ import annotations

import itertools
import sys
import types
from typing import Any, Callable, Dict, List, Sequence, Tuple

import pytest

from dbusgen.models import Arg, Interface, Method, Property, Signal


class FakeBusObject:
    """Test double recording calls made by generated proxies."""

    def __init__(self, dest: str, path: str, replies: Dict[str, Any]) -> None:
        self.dest = dest
        self.path = path
        self.replies = replies
        self.calls: List[Tuple[str, int, Tuple[Any, ...]]] = []

    def call(self, method: str, flags: int, *args: Any) -> Sequence[Any]:
        self.calls.append((method, flags, args))
        reply = self.replies.get(method, ())
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeConnection:
    """Hands out FakeBusObjects sharing one reply table."""

    def __init__(self) -> None:
        self.replies: Dict[str, Any] = {}
        self.objects: List[FakeBusObject] = []

    def object(self, dest: str, path: str) -> FakeBusObject:
        obj = FakeBusObject(dest, path, self.replies)
        self.objects.append(obj)
        return obj


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def load_module(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], types.ModuleType]:
    """Execute generated source as an importable module."""
    counter = itertools.count()

    def _load(source: str) -> types.ModuleType:
        name = f"dbusgen_generated_{next(counter)}"
        module = types.ModuleType(name)
        monkeypatch.setitem(sys.modules, name, module)
        exec(compile(source, name, "exec"), module.__dict__)
        return module

    return _load


@pytest.fixture
def demo_interface() -> Interface:
    return Interface(
        name="org.example.Demo",
        methods=[Method(name="GetValue", out_args=[Arg(name="value", type="s")])],
        signals=[Signal(name="Changed", args=[Arg(name="value", type="s")])],
    )


@pytest.fixture
def calc_interface() -> Interface:
    return Interface(
        name="org.example.Calc",
        methods=[
            Method(
                name="Add",
                in_args=[Arg(name="a", type="i"), Arg(name="b", type="i")],
                out_args=[Arg(name="total", type="i"), Arg(name="overflow", type="b")],
            ),
            Method(name="Reset", in_args=[Arg(name="to", type="x")]),
            Method(name="Ping"),
        ],
        properties=[
            Property(name="Version", type="s"),
            Property(name="Precision", type="u", access="readwrite"),
            Property(name="Secret", type="s", access="write"),
        ],
    )
