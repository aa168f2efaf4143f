"""
Error taxonomy — every failure the generator can report.

All errors derive from ``GenerationError`` so callers (the use case
layer, the CLI) can catch one type and surface the message verbatim.
Messages carry the offending file, field, or directory so the user can
act on them without re-running with extra diagnostics.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for all generator failures."""


class ConfigError(GenerationError):
    """Missing required descriptor field, or invalid project/engine configuration."""


class ParseError(GenerationError):
    """A descriptor file could not be parsed."""


class PathError(GenerationError):
    """A path is not where it must be (descriptor outside root, parent is a file)."""


class UnsupportedTypeError(GenerationError):
    """No descriptor provider is registered for a file's extension."""


class GenerationIOError(GenerationError):
    """Creating a directory or writing an output file failed."""


class TemplateError(GenerationError):
    """A template could not be located or opened."""


class RenderError(GenerationError):
    """Template evaluation failed against the supplied data model."""


class IncompleteUnitError(GenerationError):
    """A generation unit was built without one of its required fields."""
