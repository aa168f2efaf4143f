"""
Generate use case — load config, walk the generator directory, render stale outputs.

Flow:
    config → required dirs → engine settings → renderer + providers
    → reference timestamp → walk → register output root
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from templategen.core.config.loader import (
    find_config_file,
    load_config,
    load_engine_settings,
    project_root,
    reference_timestamp,
)
from templategen.core.engine.dispatcher import DirectoryDispatcher
from templategen.core.engine.renderer import TemplateRenderer
from templategen.core.errors import GenerationError
from templategen.core.models.config import GeneratorConfig
from templategen.core.models.outcome import GenerationOutcome
from templategen.core.providers.registry import default_registry

logger = logging.getLogger(__name__)

SourceRootCallback = Callable[[Path, str], None]
"""Called with (output_dir, scope) after a successful run."""


@dataclass
class GenerateResult:
    """Result of a generate run."""

    config: GeneratorConfig | None = None
    config_path: Path | None = None
    outcomes: list[GenerationOutcome] = field(default_factory=list)
    source_root: Path | None = None
    scope: str = ""
    dry_run: bool = False
    error: str | None = None

    def _count(self, status: str) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def generated(self) -> int:
        return self._count("generated")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def stale(self) -> int:
        return self._count("stale")

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error:
            return {"ok": False, "error": self.error}
        return {
            "ok": True,
            "project": self.config.name if self.config else None,
            "config_path": str(self.config_path) if self.config_path else None,
            "dry_run": self.dry_run,
            "counts": {
                "total": len(self.outcomes),
                "generated": self.generated,
                "skipped": self.skipped,
                "stale": self.stale,
            },
            "outcomes": [o.model_dump() for o in self.outcomes],
            "source_root": str(self.source_root) if self.source_root else None,
            "scope": self.scope,
        }


def run_generate(
    config_path: Path | None = None,
    dry_run: bool = False,
    register_source_root: SourceRootCallback | None = None,
) -> GenerateResult:
    """Run generation for the project described by templategen.yml.

    Args:
        config_path: Explicit config path (default: search upward from cwd).
        dry_run: Report stale outputs without writing anything.
        register_source_root: Called with the output root and scope once
            the walk succeeds (not called on dry runs).

    Returns:
        GenerateResult; ``error`` holds the failure message verbatim.
    """
    result = GenerateResult(dry_run=dry_run)

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.error = "No templategen.yml found."
        return result
    result.config_path = config_path

    try:
        config = load_config(config_path)
    except GenerationError as e:
        result.error = str(e)
        return result
    result.config = config

    base = project_root(config_path)
    generator_dir = config.resolve_dir(config.generator_dir, base)
    template_dir = config.resolve_dir(config.template_dir, base)
    output_dir = config.resolve_dir(config.output_dir, base)

    for required in (generator_dir, template_dir):
        if not required.is_dir():
            result.error = f"Required directory does not exist: {required}"
            return result

    try:
        settings = load_engine_settings(config, base)
        renderer = TemplateRenderer(template_dir, settings)
        registry = default_registry(generator_dir, template_dir, output_dir)
        dispatcher = DirectoryDispatcher(
            registry=registry,
            renderer=renderer,
            reference_timestamp=reference_timestamp(config_path, config.reference_files),
            build_properties=config.properties,
            context_key=config.context_key,
        )
        result.outcomes = dispatcher.walk(generator_dir, dry_run=dry_run)
    except GenerationError as e:
        logger.debug("Failed to process files in generator dir %s: %s", generator_dir, e)
        result.error = str(e)
        return result

    if not dry_run:
        result.source_root = output_dir
        result.scope = config.scope
        if register_source_root is not None:
            register_source_root(output_dir, config.scope)

    return result
