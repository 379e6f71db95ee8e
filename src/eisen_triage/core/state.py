# src/eisen_triage/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..triage.board import group_by_quadrant
from ..triage.models import TaskRecord
from .ports import Refiner


@dataclass
class AppState:
    """
    Per-session state of the console front-end.

    The classification engine itself is stateless; this only holds what the
    console shows on its board and the user's refinement toggle.
    """

    settings: Any
    refiner: Refiner
    refine_enabled: bool

    tasks: list[TaskRecord] = field(default_factory=list)

    def find_task(self, ref: str) -> TaskRecord | None:
        """Look up a task by 1-based position on the board listing or by id."""
        ref = (ref or "").strip()
        if ref.isdecimal():
            idx = int(ref) - 1
            listing = self.board_order()
            if 0 <= idx < len(listing):
                return listing[idx]
            return None
        for t in self.tasks:
            if t.id == ref:
                return t
        return None

    def replace_task(self, updated: TaskRecord) -> None:
        self.tasks = [updated if t.id == updated.id else t for t in self.tasks]

    def board_order(self) -> list[TaskRecord]:
        columns = group_by_quadrant(self.tasks)
        return [t for col in columns.values() for t in col]
