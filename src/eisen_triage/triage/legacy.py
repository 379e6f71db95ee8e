# src/eisen_triage/triage/legacy.py

"""
One-time import of tasks saved by the older session-storage format.

The old payload is a JSON array of loosely-typed task objects (camelCase keys).
Whatever the old record already carries is kept; missing scores, quadrant and
reasoning are recomputed with the current heuristics. Bad payloads import nothing.
"""

from __future__ import annotations

import json
import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Any

from .badges import build_reasoning, compute_badges
from .decide import decide_quadrant
from .models import Quadrant, TaskRecord
from .scoring import score_importance, score_urgency, utc_now

logger = logging.getLogger(__name__)


def _is_finite_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def _opt_int(v: Any) -> int | None:
    # Old records stored 0/""/null interchangeably for "unset".
    if not _is_finite_number(v) or not v:
        return None
    return int(v)


def _parse_dt(v: Any) -> datetime | None:
    if not v:
        return None
    try:
        if _is_finite_number(v):
            dt = datetime.fromtimestamp(float(v) / 1000.0, tz=timezone.utc)
        elif isinstance(v, str):
            dt = datetime.fromisoformat(v.strip())
        else:
            return None
    except (ValueError, OverflowError, OSError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _tags(v: Any) -> list[str]:
    if not isinstance(v, list):
        return []
    return [str(t) for t in v if isinstance(t, (str, int, float)) and not isinstance(t, bool)]


def normalize_legacy_task(raw: dict[str, Any], *, now: datetime) -> TaskRecord:
    text = raw.get("text") or ""
    if not isinstance(text, str):
        text = str(text)

    due_at = _parse_dt(raw.get("dueAt"))
    tags = _tags(raw.get("tags"))
    estimate_mins = _opt_int(raw.get("estimateMins"))
    urgency_hint = _opt_int(raw.get("urgencyHint"))
    importance_hint = _opt_int(raw.get("importanceHint"))

    stored_u = raw.get("urgency")
    if _is_finite_number(stored_u):
        urgency = int(stored_u)
    else:
        urgency = score_urgency(text, due_at, urgency_hint, now=now)

    stored_i = raw.get("importance")
    if _is_finite_number(stored_i):
        importance = int(stored_i)
    else:
        importance = score_importance(text, tags, estimate_mins, importance_hint)

    quadrant = Quadrant.parse(raw.get("quadrant")) or decide_quadrant(urgency, importance)

    reasoning = raw.get("reasoning")
    if not reasoning or not isinstance(reasoning, str):
        reasoning = build_reasoning(compute_badges(text, due_at, tags, estimate_mins, now=now))

    record_id = raw.get("id")
    if not record_id:
        record_id = uuid.uuid4().hex

    return TaskRecord(
        id=str(record_id),
        text=text,
        due_at=due_at,
        estimate_mins=estimate_mins,
        tags=tags,
        importance_hint=importance_hint,
        urgency_hint=urgency_hint,
        urgency=urgency,
        importance=importance,
        quadrant=quadrant,
        ai_suggestion=Quadrant.parse(raw.get("aiSuggestion")),
        reasoning=reasoning,
        created_at=_parse_dt(raw.get("createdAt")) or now,
        done_at=_parse_dt(raw.get("doneAt")),
    )


def import_legacy_payload(raw: str | None, *, now: datetime | None = None) -> list[TaskRecord]:
    """Parse an old JSON payload into records. Never raises on bad input."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Legacy import: payload is not valid JSON, nothing imported.")
        return []
    if not isinstance(data, list):
        logger.warning("Legacy import: payload is not a list, nothing imported.")
        return []

    if now is None:
        now = utc_now()

    out: list[TaskRecord] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        out.append(normalize_legacy_task(item, now=now))

    logger.info("Legacy import: %d of %d entries imported.", len(out), len(data))
    return out
