"""
Domain models — Pydantic types for the generator.

    from templategen.core.models import GeneratorConfig, EngineSettings, GenerationOutcome
"""

from templategen.core.models.config import EngineSettings, GeneratorConfig
from templategen.core.models.outcome import GenerationOutcome

__all__ = [
    "EngineSettings",
    "GenerationOutcome",
    "GeneratorConfig",
]
