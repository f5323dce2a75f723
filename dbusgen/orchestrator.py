"""Pipeline orchestration from introspection documents to a bindings module."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from jinja2 import Environment

from .config import GenConfig, load_config
from .introspect import filter_interfaces, load_interfaces, parse_introspection
from .logging import get_logger
from .models import Interface
from .printer import SourceNormalizer, render_module

DEFAULT_PACKAGE = "bindings"


@dataclass
class GenerationOutcome:
    """Result of a generation run."""

    package: str
    source: str
    interfaces: List[str]
    path: Optional[Path] = None


class Orchestrator:
    """Coordinates config, introspection parsing, filtering, and printing."""

    def __init__(
        self,
        normalizer: SourceNormalizer | None = None,
        env: Environment | None = None,
    ) -> None:
        self.normalizer = normalizer or SourceNormalizer()
        self.env = env
        self.logger = get_logger("orchestrator")

    def run(
        self,
        sources: Sequence[Path],
        *,
        package: Optional[str] = None,
        output: Optional[Path] = None,
        only: Sequence[str] = (),
        exclude: Sequence[str] = (),
        strip_prefix: Optional[str] = None,
        config_path: Optional[Path] = None,
    ) -> GenerationOutcome:
        """Generate bindings for introspection files, writing ``output`` if set."""
        config = load_config(config_path or Path.cwd()).merged(
            package=package,
            output=output,
            strip_prefix=strip_prefix,
            only=only,
            exclude=exclude,
        )
        self.logger.info("Generating bindings from %d introspection file(s)", len(sources))
        ifaces = load_interfaces(sources, strip_prefix=config.strip_prefix)
        outcome = self._render(ifaces, config)

        if config.output is not None:
            # The module is fully rendered before the file is touched.
            config.output.parent.mkdir(parents=True, exist_ok=True)
            config.output.write_text(outcome.source, encoding="utf-8")
            outcome.path = config.output
            self.logger.info("Wrote %s", config.output)
        return outcome

    def generate(
        self,
        documents: Sequence[str],
        *,
        package: Optional[str] = None,
        only: Sequence[str] = (),
        exclude: Sequence[str] = (),
        strip_prefix: Optional[str] = None,
    ) -> GenerationOutcome:
        """Generate bindings for in-memory introspection documents."""
        config = GenConfig(
            root=Path.cwd(),
            package=package,
            strip_prefix=strip_prefix,
            only=list(only),
            exclude=list(exclude),
        )
        ifaces: List[Interface] = []
        seen: set[str] = set()
        for index, document in enumerate(documents):
            parsed = parse_introspection(
                document, strip_prefix=strip_prefix, source=f"<document {index}>"
            )
            for iface in parsed:
                if iface.name in seen:
                    self.logger.warning("Skipping duplicate interface %s", iface.name)
                    continue
                seen.add(iface.name)
                ifaces.append(iface)
        return self._render(ifaces, config)

    def _render(self, ifaces: Sequence[Interface], config: GenConfig) -> GenerationOutcome:
        selected = filter_interfaces(ifaces, only=config.only, exclude=config.exclude)
        package = self._package_name(config)
        self.logger.debug(
            "Selected %d of %d interfaces for package %s", len(selected), len(ifaces), package
        )
        source = render_module(package, selected, env=self.env, normalizer=self.normalizer)
        return GenerationOutcome(
            package=package,
            source=source,
            interfaces=[iface.name for iface in selected],
        )

    @staticmethod
    def _package_name(config: GenConfig) -> str:
        if config.package:
            return config.package
        if config.output is not None:
            return config.output.stem
        return DEFAULT_PACKAGE


__all__ = ["DEFAULT_PACKAGE", "GenerationOutcome", "Orchestrator"]
