# src/eisen_triage/triage/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class Quadrant(StrEnum):
    """
    Eisenhower quadrant.

    do=urgent & important; schedule=not urgent & important;
    delegate=urgent & not important; eliminate=neither.
    """

    DO = "do"
    SCHEDULE = "schedule"
    DELEGATE = "delegate"
    ELIMINATE = "eliminate"

    @classmethod
    def parse(cls, raw: object) -> Quadrant | None:
        """Lenient parse for labels coming from JSON; unknown labels -> None."""
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


QUADRANTS: tuple[Quadrant, ...] = (
    Quadrant.DO,
    Quadrant.SCHEDULE,
    Quadrant.DELEGATE,
    Quadrant.ELIMINATE,
)


@dataclass(slots=True, frozen=True)
class TaskInput:
    """Read-only view of the task attributes the engine scores."""

    text: str
    due_at: datetime | None = None
    estimate_mins: int | None = None
    tags: tuple[str, ...] = ()
    urgency_hint: int | None = None
    importance_hint: int | None = None


@dataclass(slots=True, frozen=True)
class ScoreResult:
    urgency: int
    importance: int


@dataclass(slots=True, frozen=True)
class RefinementResult:
    quadrant: Quadrant
    reasoning: str
    refined: bool = False


@dataclass(slots=True, frozen=True)
class Classification:
    """Everything the engine hands back to its collaborators for one task."""

    urgency: int
    importance: int
    quadrant: Quadrant
    badges: tuple[str, ...]
    reasoning: str
    borderline: bool
    # Advisory only: the heuristic quadrant above is never overwritten.
    ai_suggestion: Quadrant | None = None


@dataclass(slots=True)
class TaskRecord:
    """
    Persisted task as the storage collaborator keeps it.

    The engine never stores these itself; it only builds and updates copies.
    """

    id: str
    text: str
    urgency: int
    importance: int
    quadrant: Quadrant
    created_at: datetime

    due_at: datetime | None = None
    estimate_mins: int | None = None
    tags: list[str] = field(default_factory=list)
    importance_hint: int | None = None
    urgency_hint: int | None = None
    ai_suggestion: Quadrant | None = None
    reasoning: str = ""
    done_at: datetime | None = None

    def to_input(self) -> TaskInput:
        return TaskInput(
            text=self.text,
            due_at=self.due_at,
            estimate_mins=self.estimate_mins,
            tags=tuple(self.tags),
            urgency_hint=self.urgency_hint,
            importance_hint=self.importance_hint,
        )
