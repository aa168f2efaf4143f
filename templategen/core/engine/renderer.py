"""
Template renderer — the Jinja2 side of generation.

Wraps a ``jinja2.Environment`` rooted at the template directory.
Templates are addressed by their location on disk; the renderer maps
that location to a loader name relative to the root.

Failure split:
    - template missing / unreadable  → ``TemplateError`` raised here
    - anything else (undefined variable, syntax error, runtime error
      inside the template) propagates as a Jinja2 exception so the
      generation unit can report it against the descriptor file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import jinja2

from templategen.core.errors import ConfigError, TemplateError
from templategen.core.models.config import EngineSettings

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Render templates from one template root directory."""

    def __init__(self, template_dir: Path, settings: EngineSettings | None = None):
        self.template_dir = Path(template_dir).resolve()
        self.settings = settings or EngineSettings()
        try:
            self.env = jinja2.Environment(
                loader=jinja2.FileSystemLoader(str(self.template_dir), encoding="utf-8"),
                undefined=jinja2.StrictUndefined,
                trim_blocks=self.settings.trim_blocks,
                lstrip_blocks=self.settings.lstrip_blocks,
                keep_trailing_newline=self.settings.keep_trailing_newline,
                autoescape=self.settings.autoescape,
                newline_sequence=self.settings.newline_sequence,
                extensions=list(self.settings.extensions),
            )
        except Exception as e:
            logger.debug(
                "Could not establish template loader for directory %s: %s",
                self.template_dir, e,
            )
            raise ConfigError(
                f"Could not establish template loader for directory: {self.template_dir}"
            ) from e

    def template_name(self, location: Path) -> str:
        """Loader name for a template location (POSIX, relative to the root)."""
        resolved = Path(location).resolve()
        try:
            return resolved.relative_to(self.template_dir).as_posix()
        except ValueError:
            raise TemplateError(f"Could not read template: {location}") from None

    def render(self, location: Path, data: Mapping[str, Any]) -> str:
        """Render the template at ``location`` with ``data``.

        Raises:
            TemplateError: The template cannot be located or read.
            jinja2.TemplateError: Any other template failure.
        """
        name = self.template_name(location)
        try:
            template = self.env.get_template(name)
        except jinja2.TemplateNotFound as e:
            raise TemplateError(f"Could not read template: {name}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateError(f"Could not read template: {name}") from e

        return template.render(dict(data))
