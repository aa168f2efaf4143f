"""
Generation outcome model — what happened to one descriptor.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class GenerationOutcome(BaseModel):
    """Result of one render-or-skip decision.

    Attributes:
        descriptor: Path of the descriptor file that triggered the unit.
        template:   Template location used for rendering.
        output:     Output file path.
        status:     ``generated`` (written), ``skipped`` (up to date),
                    or ``stale`` (dry run, would be written).
        reason:     Short human-readable explanation.
    """

    descriptor: str
    template: str
    output: str
    status: Literal["generated", "skipped", "stale"]
    reason: str = ""

    @property
    def written(self) -> bool:
        return self.status == "generated"
