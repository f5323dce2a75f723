"""CLI parser and entrypoint tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from dbusgen.cli import _build_parser, main

XML = """<node>
  <interface name="org.example.Demo">
    <method name="GetValue"><arg name="value" type="s" direction="out"/></method>
  </interface>
</node>
"""


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate", "a.xml"])
    assert args.verbose is True
    assert args.command == "generate"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate", "a.xml", "--verbose"])
    assert args.verbose is True


def test_cli_collects_repeatable_filters() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["generate", "a.xml", "b.xml", "--only", "org.a.*", "--only", "org.b.*", "--except", "org.a.X"]
    )
    assert args.sources == [Path("a.xml"), Path("b.xml")]
    assert args.only == ["org.a.*", "org.b.*"]
    assert args.exclude == ["org.a.X"]
    assert args.package is None


def test_cli_accepts_quiet_on_subcommand() -> None:
    args = _build_parser().parse_args(["generate", "a.xml", "-q"])
    assert args.quiet is True
    assert args.verbose is False


def test_cli_serve_defaults() -> None:
    args = _build_parser().parse_args(["serve"])
    assert (args.host, args.port) == ("127.0.0.1", 8000)


def test_main_prints_module_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "demo.xml"
    source.write_text(XML, encoding="utf-8")
    main(["generate", str(source), "-p", "demo", "--config", str(tmp_path)])
    out = capsys.readouterr().out
    assert out.startswith("# Generated by dbusgen, don't edit!")
    assert "class OrgExampleDemo:" in out


def test_main_writes_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "demo.xml"
    source.write_text(XML, encoding="utf-8")
    target = tmp_path / "demo_bus.py"
    main(["generate", str(source), "-o", str(target), "--config", str(tmp_path)])
    assert target.exists()
    assert "written to" in capsys.readouterr().out


def test_main_exits_on_invalid_xml(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "broken.xml"
    source.write_text("<node>", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(source), "--config", str(tmp_path)])
    assert excinfo.value.code == 1
    assert "malformed introspection XML" in capsys.readouterr().err
