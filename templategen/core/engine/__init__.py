"""
Generation engine — renderer, generation unit, and directory dispatcher.
"""

from templategen.core.engine.dispatcher import DirectoryDispatcher, iter_regular_files
from templategen.core.engine.renderer import TemplateRenderer
from templategen.core.engine.unit import GenerationUnit

__all__ = [
    "DirectoryDispatcher",
    "GenerationUnit",
    "TemplateRenderer",
    "iter_regular_files",
]
