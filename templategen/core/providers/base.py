"""
Descriptor provider base — the contract between the dispatcher and file formats.

A provider turns one descriptor file into the three things a
generation unit needs from it: the template location, the output
location, and the data model.  The dispatcher adds the descriptor path,
the reference timestamp and the shared build context itself.

To support a new descriptor format:
    1. Subclass ``DescriptorProvider`` (or ``StructuredDataProvider``
       for mapping-shaped formats)
    2. Implement ``name``, ``extensions`` and ``provide``
    3. Register it in the ``ProviderRegistry``
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from templategen.core.errors import ConfigError, ParseError, PathError

TEMPLATE_NAME_KEY = "templateName"
DATA_MODEL_KEY = "dataModel"


class ProvidedProperties(BaseModel):
    """What a provider contributes to a generation unit."""

    template_location: Path
    output_location: Path
    data_model: dict[str, Any] = Field(default_factory=dict)


class DescriptorProvider(ABC):
    """Abstract base class for descriptor providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Format identifier (e.g. 'json')."""

    @property
    @abstractmethod
    def extensions(self) -> tuple[str, ...]:
        """File extensions handled, including the leading dot."""

    @abstractmethod
    def provide(self, descriptor_path: Path) -> ProvidedProperties:
        """Read a descriptor file and derive template, output and data model."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class StructuredDataProvider(DescriptorProvider):
    """Provider for formats that parse into a top-level mapping.

    Recognised fields:
        templateName (required): template path relative to the template root.
        dataModel (optional): mapping handed to the template, default ``{}``.

    The output path mirrors the descriptor's path below the generator
    root, minus the format suffix, placed under the output root.
    """

    def __init__(self, generator_dir: Path, template_dir: Path, output_dir: Path):
        self.generator_dir = Path(generator_dir)
        self.template_dir = Path(template_dir)
        self.output_dir = Path(output_dir)

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Parse raw descriptor text.  Any exception counts as a parse failure."""

    def provide(self, descriptor_path: Path) -> ProvidedProperties:
        data = self._load(descriptor_path)

        data_model = data.get(DATA_MODEL_KEY)
        if data_model is None:
            data_model = {}
        elif not isinstance(data_model, dict):
            raise ParseError(
                f"Property {DATA_MODEL_KEY} must be a mapping in {self.name} data file: "
                f"{descriptor_path}"
            )
        elif not all(isinstance(key, str) for key in data_model):
            # YAML loads `1:` as int and `yes:` / `on:` as bool
            raise ParseError(
                f"Property {DATA_MODEL_KEY} must have string keys in {self.name} data file: "
                f"{descriptor_path}"
            )

        template_name = data.get(TEMPLATE_NAME_KEY)
        if template_name is None:
            raise ConfigError(
                f"Required {self.name} data property not found: {TEMPLATE_NAME_KEY}"
            )

        return ProvidedProperties(
            template_location=self.template_dir / str(template_name),
            output_location=self.output_path(descriptor_path),
            data_model=data_model,
        )

    def output_path(self, descriptor_path: Path) -> Path:
        """Map a descriptor path to its output path.

        ``<generator_dir>/a/b/file.txt.json`` → ``<output_dir>/a/b/file.txt``
        """
        root = self.generator_dir.resolve()
        resolved = Path(descriptor_path).resolve()
        try:
            relative = resolved.relative_to(root).as_posix()
        except ValueError:
            raise PathError(
                f"Descriptor file not in generator directory: {descriptor_path}"
            ) from None

        for suffix in sorted(self.extensions, key=len, reverse=True):
            if relative.endswith(suffix):
                relative = relative[: -len(suffix)]
                break

        return self.output_dir / relative

    def _load(self, descriptor_path: Path) -> dict[str, Any]:
        try:
            text = Path(descriptor_path).read_text(encoding="utf-8")
            data = self.parse(text)
        except Exception as e:
            raise ParseError(
                f"Could not parse {self.name} data file: {descriptor_path}"
            ) from e

        if not isinstance(data, dict):
            raise ParseError(
                f"Could not parse {self.name} data file: {descriptor_path} "
                f"(expected a mapping, got {type(data).__name__})"
            )
        return data
