"""Tests for dbusgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from dbusgen.config import ConfigError, GenConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, GenConfig)
    assert config.root == tmp_path.resolve()
    assert config.package is None
    assert config.output is None
    assert config.strip_prefix is None
    assert config.only == []
    assert config.exclude == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".dbusgen.yml").write_text(
        """
package: demo
output: gen/demo_bus.py
strip_prefix: "org.example."
only:
  - "org.example.*"
except: "org.example.Internal"
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.package == "demo"
    assert config.output == tmp_path.resolve() / "gen" / "demo_bus.py"
    assert config.strip_prefix == "org.example."
    assert config.only == ["org.example.*"]
    assert config.exclude == ["org.example.Internal"]


def test_load_config_accepts_explicit_file(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text("package: custom\n", encoding="utf-8")
    assert load_config(config_file).package == "custom"


def test_load_config_empty_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".dbusgen.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).package is None


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".dbusgen.yml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".dbusgen.yml").write_text("package: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_merged_prefers_explicit_values(tmp_path: Path) -> None:
    base = GenConfig(root=tmp_path, package="file", only=["a.*"], strip_prefix="a.")
    merged = base.merged(package="flag", exclude=["b.*"], strip_prefix="")
    assert merged.package == "flag"
    assert merged.only == ["a.*"]
    assert merged.exclude == ["b.*"]
    assert merged.strip_prefix == ""
    assert base.merged().package == "file"
