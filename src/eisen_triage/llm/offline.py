# src/eisen_triage/llm/offline.py

from __future__ import annotations

from ..triage.models import Quadrant, RefinementResult
from .refine import fallback_result


class OfflineRefiner:
    """
    Refiner used when no local text-generation service is configured.

    Performs no I/O and always answers with the heuristic quadrant and the
    "offline fallback" marker, exactly like a failed remote refinement.
    """

    async def refine(self, sanitized_text: str, heuristic: Quadrant) -> RefinementResult:
        return fallback_result(heuristic)
