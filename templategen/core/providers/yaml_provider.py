"""
YAML descriptor provider — same fields as the JSON provider.

    templateName: java/Enum.java.j2
    dataModel:
      package: com.example
      values: [A, B]
"""

from __future__ import annotations

from typing import Any

import yaml

from templategen.core.providers.base import StructuredDataProvider


class YamlDescriptorProvider(StructuredDataProvider):
    """Reads ``.yml`` / ``.yaml`` descriptors."""

    @property
    def name(self) -> str:
        return "yaml"

    @property
    def extensions(self) -> tuple[str, ...]:
        return (".yml", ".yaml")

    def parse(self, text: str) -> Any:
        return yaml.safe_load(text)
