"""
JSON descriptor provider.

    {
      "templateName": "java/Enum.java.j2",
      "dataModel": {"package": "com.example", "values": ["A", "B"]}
    }
"""

from __future__ import annotations

import json
from typing import Any

from templategen.core.providers.base import StructuredDataProvider


class JsonDescriptorProvider(StructuredDataProvider):
    """Reads ``.json`` descriptors."""

    @property
    def name(self) -> str:
        return "json"

    @property
    def extensions(self) -> tuple[str, ...]:
        return (".json",)

    def parse(self, text: str) -> Any:
        return json.loads(text)
