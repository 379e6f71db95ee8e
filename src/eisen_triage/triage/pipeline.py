# src/eisen_triage/triage/pipeline.py

"""
Classification pipeline.

raw attributes -> scores -> quadrant + badges -> (borderline and opted in)
-> sanitized text -> refiner -> final classification.

Only the refinement step performs I/O. The heuristic classification is always
computed first and is a complete answer on its own.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime

from ..core.ports import Refiner
from .badges import append_refinement, build_reasoning, compute_badges
from .decide import decide_quadrant, is_borderline
from .models import Classification, ScoreResult, TaskInput, TaskRecord
from .sanitize import sanitize_for_model
from .scoring import score_importance, score_urgency, utc_now

logger = logging.getLogger(__name__)


def score_task(task: TaskInput, *, now: datetime | None = None) -> ScoreResult:
    return ScoreResult(
        urgency=score_urgency(task.text, task.due_at, task.urgency_hint, now=now),
        importance=score_importance(task.text, task.tags, task.estimate_mins, task.importance_hint),
    )


def classify_heuristic(task: TaskInput, *, now: datetime | None = None) -> Classification:
    if now is None:
        now = utc_now()

    scores = score_task(task, now=now)
    quadrant = decide_quadrant(scores.urgency, scores.importance)
    badges = compute_badges(task.text, task.due_at, task.tags, task.estimate_mins, now=now)

    return Classification(
        urgency=scores.urgency,
        importance=scores.importance,
        quadrant=quadrant,
        badges=tuple(badges),
        reasoning=build_reasoning(badges),
        borderline=is_borderline(scores.urgency, scores.importance, quadrant),
    )


async def classify_task(
    task: TaskInput,
    *,
    refine_enabled: bool = False,
    refiner: Refiner | None = None,
    now: datetime | None = None,
) -> Classification:
    """
    Classify one task, optionally asking the refiner about borderline cases.

    The refiner runs only when the caller opted in, a refiner is provided and the
    heuristic result is borderline. Its answer is advisory: it lands in
    `ai_suggestion` and the reasoning, the heuristic quadrant stays.
    """
    result = classify_heuristic(task, now=now)

    if not refine_enabled or refiner is None or not result.borderline:
        return result

    sanitized = sanitize_for_model(task.text)
    refined = await refiner.refine(sanitized, result.quadrant)
    logger.debug(
        "classify: heuristic=%s suggestion=%s refined=%s",
        result.quadrant.value,
        refined.quadrant.value,
        refined.refined,
    )

    return replace(
        result,
        ai_suggestion=refined.quadrant,
        reasoning=append_refinement(result.reasoning, refined.reasoning),
    )


def build_record(
    task: TaskInput,
    classification: Classification,
    *,
    now: datetime | None = None,
    record_id: str | None = None,
) -> TaskRecord:
    """Assemble the record the storage collaborator persists for a new task."""
    return TaskRecord(
        id=record_id or uuid.uuid4().hex,
        text=task.text,
        due_at=task.due_at,
        estimate_mins=task.estimate_mins,
        tags=list(task.tags),
        importance_hint=task.importance_hint,
        urgency_hint=task.urgency_hint,
        urgency=classification.urgency,
        importance=classification.importance,
        quadrant=classification.quadrant,
        ai_suggestion=classification.ai_suggestion,
        reasoning=classification.reasoning,
        created_at=now or utc_now(),
        done_at=None,
    )
