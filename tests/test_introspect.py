"""Tests for the introspection XML front-end."""

from __future__ import annotations

from pathlib import Path

import pytest

from dbusgen.introspect import (
    IntrospectionError,
    filter_interfaces,
    load_interfaces,
    parse_introspection,
)
from dbusgen.models import Interface

DEMO_XML = """<!DOCTYPE node PUBLIC "-//freedesktop//DTD D-BUS Object Introspection 1.0//EN"
 "http://www.freedesktop.org/standards/dbus/1.0/introspect.dtd">
<node>
  <interface name="org.example.Demo">
    <method name="GetValue">
      <arg name="value" type="s" direction="out"/>
    </method>
    <method name="Replace">
      <arg name="value" type="s"/>
      <arg type="u" direction="in"/>
      <arg name="value" type="s" direction="out"/>
    </method>
    <property name="Version" type="s" access="read"/>
    <property name="Secret" type="s" access="write"/>
    <signal name="Changed">
      <arg name="value" type="s"/>
    </signal>
    <annotation name="org.freedesktop.DBus.Deprecated" value="false"/>
  </interface>
  <node name="child">
    <interface name="org.example.Child">
      <method name="Ping"/>
    </interface>
  </node>
</node>
"""


def test_parse_introspection_builds_model() -> None:
    demo, child = parse_introspection(DEMO_XML)
    assert demo.name == "org.example.Demo"
    assert [m.name for m in demo.methods] == ["GetValue", "Replace"]
    assert demo.methods[0].out_args[0].name == "value"
    assert [p.name for p in demo.properties] == ["Version", "Secret"]
    assert [p.readable for p in demo.properties] == [True, False]
    assert demo.signals[0].args[0].type == "s"
    assert child.name == "org.example.Child"
    assert child.methods[0].in_args == [] and child.methods[0].out_args == []


def test_method_arguments_get_unique_bindings() -> None:
    demo, _ = parse_introspection(DEMO_XML)
    replace = demo.methods[1]
    assert [arg.name for arg in replace.in_args] == ["value", "arg1"]
    assert [arg.name for arg in replace.out_args] == ["value_2"]


def test_bare_interface_root_is_accepted() -> None:
    (iface,) = parse_introspection('<interface name="org.example.Solo"><method name="Go"/></interface>')
    assert iface.identifier == "OrgExampleSolo"


def test_strip_prefix_is_applied() -> None:
    demo, child = parse_introspection(DEMO_XML, strip_prefix="org.example.")
    assert (demo.identifier, child.identifier) == ("Demo", "Child")


@pytest.mark.parametrize(
    "document",
    [
        "<node><interface name='a.B'>",
        "<root/>",
        "<node><interface/></node>",
        "<node><interface name='a.B'><method/></interface></node>",
        "<node><interface name='a.B'><method name='M'><arg type='s' direction='sideways'/></method></interface></node>",
        "<node><interface name='a.B'><method name='M'><arg name='x'/></method></interface></node>",
        "<node><interface name='a.B'><method name='M'><arg name='x' type='a{'/></method></interface></node>",
        "<node><interface name='a.B'><property name='P' type='s' access='sometimes'/></interface></node>",
    ],
)
def test_parse_introspection_rejects_invalid_documents(document: str) -> None:
    with pytest.raises(IntrospectionError):
        parse_introspection(document)


def test_load_interfaces_keeps_first_duplicate(tmp_path: Path) -> None:
    first = tmp_path / "first.xml"
    second = tmp_path / "second.xml"
    first.write_text(DEMO_XML, encoding="utf-8")
    second.write_text(
        '<node><interface name="org.example.Demo"><method name="Other"/></interface>'
        '<interface name="org.example.Extra"/></node>',
        encoding="utf-8",
    )
    ifaces = load_interfaces([first, second])
    assert [iface.name for iface in ifaces] == ["org.example.Demo", "org.example.Child", "org.example.Extra"]
    assert [m.name for m in ifaces[0].methods] == ["GetValue", "Replace"]


def test_load_interfaces_reports_missing_files(tmp_path: Path) -> None:
    with pytest.raises(IntrospectionError, match="cannot read"):
        load_interfaces([tmp_path / "missing.xml"])


def test_filter_interfaces_by_patterns() -> None:
    ifaces = [Interface(name=name) for name in ("org.example.A", "org.example.B", "org.other.C")]
    assert [i.name for i in filter_interfaces(ifaces, only=["org.example.*"])] == [
        "org.example.A",
        "org.example.B",
    ]
    assert [i.name for i in filter_interfaces(ifaces, exclude=["*.B"])] == ["org.example.A", "org.other.C"]
    assert [i.name for i in filter_interfaces(ifaces, only=["org.*"], exclude=["org.other.*"])] == [
        "org.example.A",
        "org.example.B",
    ]
