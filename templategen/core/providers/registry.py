"""
Provider registry — the build-wide extension → provider table.

Built once at startup and read-only during a walk.  Lookups for an
unregistered extension fail hard: a descriptor directory holding an
unexpected file type always fails the run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from templategen.core.errors import UnsupportedTypeError
from templategen.core.providers.base import DescriptorProvider

logger = logging.getLogger(__name__)


def file_extension(path: Path) -> str | None:
    """Substring of the file name from its last dot, or None without a dot."""
    name = Path(path).name
    idx = name.rfind(".")
    if idx < 0:
        return None
    return name[idx:]


class ProviderRegistry:
    """Maps file extensions (with leading dot) to descriptor providers."""

    def __init__(self) -> None:
        self._providers: dict[str, DescriptorProvider] = {}

    def register(self, provider: DescriptorProvider) -> None:
        """Register a provider under every extension it declares."""
        for ext in provider.extensions:
            if ext in self._providers:
                logger.warning("Overwriting existing provider for %s", ext)
            self._providers[ext] = provider
            logger.debug("Registered provider %s for %s", provider.name, ext)

    def get(self, extension: str) -> DescriptorProvider | None:
        return self._providers.get(extension)

    def for_file(self, path: Path) -> DescriptorProvider:
        """Select the provider for a descriptor file.

        Raises:
            UnsupportedTypeError: No provider for the file's extension.
        """
        ext = file_extension(path)
        provider = self._providers.get(ext) if ext else None
        if provider is None:
            raise UnsupportedTypeError(f"Unknown file extension: {path}")
        return provider

    def extensions(self) -> list[str]:
        return sorted(self._providers)

    def describe(self) -> list[dict[str, Any]]:
        """Registered providers, one entry per extension."""
        return [
            {
                "extension": ext,
                "provider": self._providers[ext].name,
                "type": self._providers[ext].__class__.__name__,
            }
            for ext in self.extensions()
        ]


def default_registry(generator_dir: Path, template_dir: Path, output_dir: Path) -> ProviderRegistry:
    """Registry with the built-in JSON and YAML providers."""
    from templategen.core.providers.json_provider import JsonDescriptorProvider
    from templategen.core.providers.yaml_provider import YamlDescriptorProvider

    registry = ProviderRegistry()
    registry.register(JsonDescriptorProvider(generator_dir, template_dir, output_dir))
    registry.register(YamlDescriptorProvider(generator_dir, template_dir, output_dir))
    return registry
