# src/eisen_triage/triage/board.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from .models import QUADRANTS, Quadrant, TaskRecord
from .scoring import utc_now


def _column_key(record: TaskRecord) -> tuple[int, int, datetime]:
    # importance desc, urgency desc, oldest first
    return (-record.importance, -record.urgency, record.created_at)


def group_by_quadrant(records: Iterable[TaskRecord]) -> dict[Quadrant, list[TaskRecord]]:
    """Board columns: every quadrant present (possibly empty), each column sorted."""
    columns: dict[Quadrant, list[TaskRecord]] = {q: [] for q in QUADRANTS}
    for record in records:
        columns[record.quadrant].append(record)
    for q in QUADRANTS:
        columns[q].sort(key=_column_key)
    return columns


def move_to_quadrant(record: TaskRecord, quadrant: Quadrant) -> TaskRecord:
    """Manual override. Scores and reasoning are left as computed."""
    return replace(record, quadrant=quadrant)


def eliminate(record: TaskRecord) -> TaskRecord:
    return move_to_quadrant(record, Quadrant.ELIMINATE)


def toggle_done(record: TaskRecord, *, now: datetime | None = None) -> TaskRecord:
    done_at = None if record.done_at else (now or utc_now())
    return replace(record, done_at=done_at)


def card_badges(record: TaskRecord, limit: int = 6) -> list[str]:
    """Badges shown on a card, recovered from the stored reasoning string."""
    parts = [p.strip() for p in (record.reasoning or "").split(";")]
    return [p for p in parts if p][:limit]
