"""Canonical formatting and well-formedness check for generated source."""

from __future__ import annotations

import ast
from typing import List

from ..logging import get_logger
from .errors import GenerationError


class SourceNormalizer:
    """Rewrites emitted text into canonical form and rejects invalid Python."""

    MAX_BLANK_LINES = 2

    def __init__(self) -> None:
        self.logger = get_logger("printer.normalize")

    def normalize(self, source: str, *, filename: str = "<generated>") -> str:
        text = self._reformat(source)
        try:
            tree = ast.parse(text, filename=filename)
            compile(tree, filename, "exec", dont_inherit=True)
        except SyntaxError as exc:
            line = exc.lineno or 0
            offending = text.splitlines()[line - 1] if 0 < line <= text.count("\n") else None
            self.logger.debug("Rejected generated source at line %d: %s", line, offending)
            raise GenerationError(
                f"generated source is not valid Python: {exc.msg} (line {line})",
                line=line,
                text=offending,
            ) from exc
        self._check_unique_definitions(tree)
        return text

    def _reformat(self, source: str) -> str:
        normalized = source.replace("\r\n", "\n").replace("\r", "\n")
        cleaned: List[str] = []
        blank_run = 0
        for line in normalized.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_run += 1
                if not cleaned or blank_run > self.MAX_BLANK_LINES:
                    continue
            else:
                blank_run = 0
            cleaned.append(stripped)

        while cleaned and cleaned[-1] == "":
            cleaned.pop()

        return "\n".join(cleaned) + "\n"

    @classmethod
    def _check_unique_definitions(cls, tree: ast.Module) -> None:
        cls._check_scope(tree.body, "")
        for node in tree.body:
            if isinstance(node, ast.ClassDef):
                cls._check_scope(node.body, node.name + ".")

    @staticmethod
    def _check_scope(body: List[ast.stmt], prefix: str) -> None:
        seen: dict[str, int] = {}
        for node in body:
            if not isinstance(node, (ast.ClassDef, ast.FunctionDef)):
                continue
            if node.name in seen:
                raise GenerationError(
                    f"{prefix}{node.name} is defined at lines {seen[node.name]} and {node.lineno}",
                    line=node.lineno,
                    text=node.name,
                )
            seen[node.name] = node.lineno
