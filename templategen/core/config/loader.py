"""
Configuration loader — reads templategen.yml into a GeneratorConfig.

Reads YAML, validates against the Pydantic schema, and returns the
typed model.  Also loads the optional engine settings file and
computes the run's reference timestamp.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from templategen.core.errors import ConfigError
from templategen.core.models.config import EngineSettings, GeneratorConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "templategen.yml"

# Optional engine settings, looked up inside source_dir
ENGINE_SETTINGS_FILE = "engine.yml"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for templategen.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to templategen.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to templategen.yml. If None, searches upward.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(f"No {CONFIG_FILE} found. Create one, or specify --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading generator config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "templategen" key or be flat
    config_data = data.get("templategen", data)

    try:
        config = GeneratorConfig.model_validate(config_data)
    except Exception as e:
        raise ConfigError(f"Invalid generator configuration: {e}") from e

    logger.info("Loaded generator config '%s'", config.name)
    return config


def load_engine_settings(config: GeneratorConfig, base: Path) -> EngineSettings:
    """Engine settings, with ``<source_dir>/engine.yml`` overriding the config file.

    Raises:
        ConfigError: The settings file can't be read or holds invalid settings.
    """
    settings_file = config.resolve_dir(config.source_dir, base) / ENGINE_SETTINGS_FILE
    if not settings_file.is_file():
        return config.engine

    try:
        overrides = yaml.safe_load(settings_file.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.debug("Failed to load %s: %s", settings_file, e)
        raise ConfigError(f"Failed to load {settings_file}") from e

    if not isinstance(overrides, dict):
        raise ConfigError(f"Invalid setting(s) in {settings_file}")

    merged = {**config.engine.model_dump(), **overrides}
    try:
        settings = EngineSettings.model_validate(merged)
    except Exception as e:
        logger.debug("Invalid setting(s) in %s: %s", settings_file, e)
        raise ConfigError(f"Invalid setting(s) in {settings_file}") from e

    logger.debug("Engine settings overridden from %s", settings_file)
    return settings


def reference_timestamp(config_path: Path, reference_files: list[str] | None = None) -> float:
    """Newest mtime across the config file and the configured reference files.

    Missing files are ignored; returns 0.0 when nothing exists.
    """
    base = config_path.parent
    candidates = [config_path]
    for rel in reference_files or []:
        path = Path(rel)
        candidates.append(path if path.is_absolute() else base / path)

    newest = 0.0
    for path in candidates:
        try:
            newest = max(newest, path.stat().st_mtime)
        except OSError:
            continue
    return newest


def project_root(config_path: Path) -> Path:
    """Absolute directory that relative paths in templategen.yml resolve against."""
    return config_path.parent.resolve()
