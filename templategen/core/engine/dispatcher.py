"""
Directory dispatcher — walks the descriptor tree and runs one unit per file.

Flow per regular file:
    extension → provider → (template, output, data) → merge build context
    → GenerationUnit.create() → render-or-skip

Fail-fast: the first error ends the walk.  Outputs written for earlier
files stay on disk.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterator, Mapping

from templategen.core.engine.renderer import TemplateRenderer
from templategen.core.engine.unit import GenerationUnit
from templategen.core.models.outcome import GenerationOutcome
from templategen.core.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_KEY = "buildProperties"


def iter_regular_files(root: Path) -> Iterator[Path]:
    """Yield every regular file below ``root`` once, in sorted order.

    Symbolic links are neither followed nor yielded.
    """
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_symlink() or not path.is_file():
                continue
            yield path


class DirectoryDispatcher:
    """Turns descriptor files into generation units and runs them.

    Args:
        registry: Extension → provider table.
        renderer: Template renderer shared by every unit.
        reference_timestamp: Newest build-configuration mtime for this run.
        build_properties: Shared context injected into every data model.
        context_key: Data-model key the shared context is stored under.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        renderer: TemplateRenderer,
        reference_timestamp: float,
        build_properties: Mapping[str, Any] | None = None,
        context_key: str = DEFAULT_CONTEXT_KEY,
    ):
        self.registry = registry
        self.renderer = renderer
        self.reference_timestamp = reference_timestamp
        self.build_properties = dict(build_properties or {})
        self.context_key = context_key

    def walk(self, root: Path, *, dry_run: bool = False) -> list[GenerationOutcome]:
        """Process every regular file under ``root``.

        Raises:
            GenerationError: The first failure encountered; the walk stops there.
        """
        outcomes: list[GenerationOutcome] = []
        for path in iter_regular_files(Path(root)):
            outcomes.append(self.dispatch(path, dry_run=dry_run))
        logger.info(
            "Processed %d descriptor(s) under %s (%d written)",
            len(outcomes), root, sum(1 for o in outcomes if o.written),
        )
        return outcomes

    def dispatch(self, path: Path, *, dry_run: bool = False) -> GenerationOutcome:
        """Build and run the generation unit for one descriptor file."""
        provider = self.registry.for_file(path)
        props = provider.provide(path)

        data_model = dict(props.data_model)
        if self.context_key in data_model:
            logger.debug(
                "Descriptor %s defines %r; replaced by build properties",
                path, self.context_key,
            )
        data_model[self.context_key] = self.build_properties

        unit = GenerationUnit.create(
            reference_timestamp=self.reference_timestamp,
            descriptor_location=path,
            template_location=props.template_location,
            output_location=props.output_location,
            data_model=data_model,
        )
        return unit.generate(self.renderer, dry_run=dry_run)
