"""Accumulating output buffer backed by jinja2 templates."""

from __future__ import annotations

import io
import json
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).with_name("templates")


def literal(value: str) -> str:
    """Render ``value`` as a double-quoted Python string literal."""
    return json.dumps(value, ensure_ascii=False)


def create_environment(templates_dir: Path | None = None) -> Environment:
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(TEMPLATES_DIR))
    env = Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["literal"] = literal
    return env


class Emitter:
    """Captures generated text in write order."""

    def __init__(self, env: Environment | None = None) -> None:
        self._env = env or create_environment()
        self._buf = io.StringIO()

    def write_formatted(self, template: str, **values: object) -> None:
        """Render the named template and append it as-is."""
        self._buf.write(self._env.get_template(template).render(**values))

    def write_line(self, *fragments: str) -> None:
        for fragment in fragments:
            self._buf.write(fragment)
        self._buf.write("\n")

    def contents(self) -> str:
        return self._buf.getvalue()
