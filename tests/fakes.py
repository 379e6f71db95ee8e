# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass

from eisen_triage.triage.models import Quadrant, RefinementResult


@dataclass(slots=True)
class RefineCall:
    text: str
    heuristic: Quadrant


class FakeRefiner:
    """
    Deterministic refiner for unit tests.

    - Captures calls for assertions
    - Suggests a fixed quadrant (or echoes the heuristic when none is set)
    """

    def __init__(self, suggestion: Quadrant | None = None, reasoning: str = "ok") -> None:
        self.suggestion = suggestion
        self.reasoning = reasoning
        self.calls: list[RefineCall] = []

    async def refine(self, sanitized_text: str, heuristic: Quadrant) -> RefinementResult:
        self.calls.append(RefineCall(text=sanitized_text, heuristic=heuristic))
        return RefinementResult(
            quadrant=self.suggestion or heuristic,
            reasoning=self.reasoning,
            refined=True,
        )
