"""
Generation unit — one (descriptor, template, output, data) task.

A unit is built once per descriptor file, asked to render-or-skip,
then thrown away.  It is the only place that decides whether an
output file is stale.

Staleness rule:
    threshold = max(reference_timestamp, mtime(descriptor), mtime(template))
    output is up to date  ⇔  output exists and mtime(output) >= threshold

A successful write stamps the output with "now", so a second call with
unchanged inputs always takes the skip path.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

from templategen.core.engine.renderer import TemplateRenderer
from templategen.core.errors import (
    GenerationIOError,
    IncompleteUnitError,
    PathError,
    RenderError,
    TemplateError,
)
from templategen.core.models.outcome import GenerationOutcome

logger = logging.getLogger(__name__)


def _mtime(path: Path) -> float:
    """Modification time in seconds, or 0.0 when the file is missing."""
    try:
        return path.stat().st_mtime
    except OSError:
        return 0.0


class GenerationUnit(BaseModel):
    """Immutable, validated record of one generation task.

    Build it with ``GenerationUnit.create()``, which checks required
    fields in a fixed order and deep-copies the data model.
    """

    model_config = ConfigDict(frozen=True)

    reference_timestamp: float
    descriptor_location: Path
    template_location: Path
    output_location: Path
    data_model: dict[str, Any]

    @classmethod
    def create(
        cls,
        *,
        reference_timestamp: float | None = None,
        descriptor_location: Path | None = None,
        template_location: Path | None = None,
        output_location: Path | None = None,
        data_model: Mapping[str, Any] | None = None,
    ) -> GenerationUnit:
        """Validate and build a unit.

        Raises:
            IncompleteUnitError: Naming the first missing field, checked
                in the order reference timestamp, descriptor, template,
                output, data model.
        """
        if reference_timestamp is None:
            raise IncompleteUnitError("Must set the reference timestamp")
        if descriptor_location is None:
            raise IncompleteUnitError("Must set a non-null descriptor_location")
        if template_location is None:
            raise IncompleteUnitError("Must set a non-null template_location")
        if output_location is None:
            raise IncompleteUnitError("Must set a non-null output_location")
        if data_model is None:
            raise IncompleteUnitError("Must set a non-null data_model")

        return cls(
            reference_timestamp=reference_timestamp,
            descriptor_location=Path(descriptor_location),
            template_location=Path(template_location),
            output_location=Path(output_location),
            data_model=copy.deepcopy(dict(data_model)),
        )

    # ── Staleness ───────────────────────────────────────────────

    def threshold(self) -> float:
        """Newest input timestamp the output must be at least as new as."""
        return max(
            self.reference_timestamp,
            _mtime(self.descriptor_location),
            _mtime(self.template_location),
        )

    def is_up_to_date(self) -> bool:
        if not self.output_location.is_file():
            return False
        return _mtime(self.output_location) >= self.threshold()

    # ── Render-or-skip ──────────────────────────────────────────

    def generate(self, renderer: TemplateRenderer, *, dry_run: bool = False) -> GenerationOutcome:
        """Render the template into the output file unless it is up to date.

        Args:
            renderer: Template renderer rooted at the template directory.
            dry_run: Report staleness without touching the filesystem.

        Raises:
            PathError: The output's parent path exists and is not a directory.
            GenerationIOError: The parent directory or output file can't be written.
            TemplateError: The template cannot be read.
            RenderError: The template failed against this unit's data model.
        """
        if self.is_up_to_date():
            logger.debug("Up to date, skipping: %s", self.output_location)
            return self._outcome("skipped", "output is newer than all inputs")

        if dry_run:
            return self._outcome("stale", "output is missing or older than its inputs")

        self._ensure_parent_dir()
        text = self._render(renderer)
        self._write(text)

        logger.info("Generated %s from %s", self.output_location, self.descriptor_location)
        return self._outcome("generated", "output was missing or stale")

    def _ensure_parent_dir(self) -> None:
        parent = self.output_location.absolute().parent
        if parent.exists() and not parent.is_dir():
            raise PathError(f"Parent directory of output file is a file: {parent}")
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GenerationIOError(f"Could not create directory: {parent}") from e

    def _render(self, renderer: TemplateRenderer) -> str:
        try:
            return renderer.render(self.template_location, self.data_model)
        except TemplateError:
            raise
        except Exception as e:
            logger.debug("Template failure for %s: %s", self.descriptor_location, e)
            raise RenderError(
                "Could not process template associated with data file: "
                f"{self.descriptor_location}"
            ) from e

    def _write(self, text: str) -> None:
        try:
            with open(self.output_location, "w", encoding="utf-8", newline="") as fh:
                fh.write(text)
        except OSError as e:
            raise GenerationIOError(
                f"Could not write output file: {self.output_location}"
            ) from e

    def _outcome(self, status: str, reason: str) -> GenerationOutcome:
        return GenerationOutcome(
            descriptor=str(self.descriptor_location),
            template=str(self.template_location),
            output=str(self.output_location),
            status=status,
            reason=reason,
        )
