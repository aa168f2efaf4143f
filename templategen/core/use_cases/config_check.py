"""
Config check use case — validate templategen.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from templategen.core.config.loader import (
    find_config_file,
    load_config,
    load_engine_settings,
    project_root,
)
from templategen.core.engine.dispatcher import iter_regular_files
from templategen.core.errors import ConfigError, GenerationError
from templategen.core.models.config import GeneratorConfig
from templategen.core.providers.registry import ProviderRegistry, default_registry


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: GeneratorConfig | None = None
    config_path: Path | None = None
    descriptor_count: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "project_name": self.config.name if self.config else None,
            "descriptor_count": self.descriptor_count,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate generator configuration and report issues.

    Args:
        config_path: Optional explicit path to templategen.yml.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.errors.append("No templategen.yml found.")
        return result
    result.config_path = config_path

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    base = project_root(config_path)

    try:
        load_engine_settings(config, base)
    except ConfigError as e:
        result.errors.append(str(e))

    generator_dir = config.resolve_dir(config.generator_dir, base)
    template_dir = config.resolve_dir(config.template_dir, base)
    output_dir = config.resolve_dir(config.output_dir, base)

    if not template_dir.is_dir():
        result.errors.append(f"Required directory does not exist: {template_dir}")

    if not generator_dir.is_dir():
        result.errors.append(f"Required directory does not exist: {generator_dir}")
    else:
        registry = default_registry(generator_dir, template_dir, output_dir)
        for path in iter_regular_files(generator_dir):
            result.descriptor_count += 1
            _check_descriptor(registry, path, config.context_key, result)
        if result.descriptor_count == 0:
            result.warnings.append("Generator directory is empty. Nothing will be generated.")

    for rel in config.reference_files:
        ref = Path(rel)
        if not (ref if ref.is_absolute() else base / ref).exists():
            result.warnings.append(f"Reference file does not exist: {rel}")

    result.valid = len(result.errors) == 0
    return result


def _check_descriptor(
    registry: ProviderRegistry,
    path: Path,
    context_key: str,
    result: ConfigCheckResult,
) -> None:
    """Parse one descriptor the way a generate run would, without rendering."""
    try:
        props = registry.for_file(path).provide(path)
    except GenerationError as e:
        result.errors.append(str(e))
        return

    if context_key in props.data_model:
        result.warnings.append(
            f"Descriptor {path} defines '{context_key}'; it will be replaced by build properties."
        )
