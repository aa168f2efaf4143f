"""
Generator configuration model — loaded from templategen.yml.

Describes where descriptors, templates and outputs live, which build
properties are shared with every template, and how the template
engine is set up.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EngineSettings(BaseModel):
    """Jinja2 environment options.

    Unknown keys are rejected so a typo in engine.yml fails loudly
    instead of being ignored.
    """

    model_config = ConfigDict(extra="forbid")

    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True
    autoescape: bool = False
    newline_sequence: Literal["\n", "\r\n", "\r"] = "\n"
    extensions: list[str] = Field(default_factory=list)


class GeneratorConfig(BaseModel):
    """Root generator configuration.

    Directory fields are stored as written in the file; use
    ``resolve_dir()`` to get absolute paths relative to the config
    file's directory.
    """

    name: str
    description: str = ""

    source_dir: str = "codegen"
    template_dir: str = "codegen/template"
    generator_dir: str = "codegen/generator"
    output_dir: str = "build/generated-sources/templategen"

    scope: Literal["main", "test"] = "main"
    context_key: str = "buildProperties"
    properties: dict[str, str] = Field(default_factory=dict)
    reference_files: list[str] = Field(default_factory=list)

    engine: EngineSettings = Field(default_factory=EngineSettings)

    @field_validator("properties", mode="before")
    @classmethod
    def _stringify_properties(cls, value: Any) -> Any:
        """Accept unquoted YAML scalars (`version: 1.0`, `debug: true`) as strings."""
        if not isinstance(value, dict):
            return value
        converted = {}
        for key, item in value.items():
            if isinstance(item, bool):
                item = "true" if item else "false"
            elif isinstance(item, (int, float)):
                item = str(item)
            converted[key] = item
        return converted

    def resolve_dir(self, value: str, base: Path) -> Path:
        """Resolve a configured path against the project base directory."""
        path = Path(value)
        if not path.is_absolute():
            path = base / path
        return path.resolve()
