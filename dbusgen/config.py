"""Configuration loading for dbusgen (.dbusgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".dbusgen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GenConfig:
    """Represents the settings defined in .dbusgen.yml."""

    root: Path
    package: Optional[str] = None
    output: Optional[Path] = None
    strip_prefix: Optional[str] = None
    only: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)

    def merged(
        self,
        *,
        package: Optional[str] = None,
        output: Optional[Path] = None,
        strip_prefix: Optional[str] = None,
        only: Sequence[str] = (),
        exclude: Sequence[str] = (),
    ) -> "GenConfig":
        """Return a copy where explicitly given values override the file."""
        return GenConfig(
            root=self.root,
            package=package or self.package,
            output=output or self.output,
            strip_prefix=strip_prefix if strip_prefix is not None else self.strip_prefix,
            only=list(only) or list(self.only),
            exclude=list(exclude) or list(self.exclude),
        )


def load_config(config_path: Path) -> GenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_str = _as_str(data.get("output"))
    return GenConfig(
        root=root,
        package=_as_str(data.get("package")),
        output=root / output_str if output_str else None,
        strip_prefix=_as_str(data.get("strip_prefix")),
        only=_as_str_list(data.get("only")),
        exclude=_as_str_list(data.get("except")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "GenConfig", "load_config"]
