# src/eisen_triage/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The pipeline depends on Protocols instead of concrete implementations,
so the refinement backend is swappable and tests can inject fakes.
"""

from typing import Protocol

from ..triage.models import Quadrant, RefinementResult


class Refiner(Protocol):
    """
    Secondary classifier for borderline tasks.

    Contract: always resolves, never raises to the caller. On any failure it
    returns the heuristic quadrant with the "offline fallback" marker.
    """

    async def refine(self, sanitized_text: str, heuristic: Quadrant) -> RefinementResult: ...
