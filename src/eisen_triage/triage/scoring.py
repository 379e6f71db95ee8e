# src/eisen_triage/triage/scoring.py

"""
Heuristic urgency/importance scoring.

Both scores are additive: every signal adds (or subtracts) a fixed amount and the
total is clamped to [0, 5] only at the end, so user hints can push a score up to
the ceiling but never past it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timezone

SCORE_MIN = 0
SCORE_MAX = 5

HIGH_VALUE_TAGS = frozenset({"clinic", "patients", "finance", "safety", "learning-core"})

URGENT_WORDS_RE = re.compile(r"\b(asap|today|eod|tonight)\b", re.ASCII)
TIME_TOKEN_RE = re.compile(r"\b\d{1,2}:\d{2}\b", re.ASCII)
OKR_RE = re.compile(r"\b(okr|goal|milestone)\b", re.IGNORECASE | re.ASCII)
LOW_VALUE_RE = re.compile(r"\b(clean inbox|file receipts|tweak theme)\b", re.IGNORECASE | re.ASCII)

_SECONDS_PER_DAY = 86400.0


def clamp_score(value: int) -> int:
    return max(SCORE_MIN, min(SCORE_MAX, value))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _aware(dt: datetime) -> datetime:
    # Naive datetimes are read as UTC.
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def due_status(due_at: datetime | None, now: datetime | None = None) -> str | None:
    """
    Classify a due date relative to `now`.

    Returns "overdue" (strictly past), "today" (delta <= 0 days but not past),
    "soon" (delta <= 2 days) or None. The "today" branch only fires when the due
    date equals `now` exactly; the boundary comparisons are kept as they are.
    """
    if due_at is None:
        return None
    due = _aware(due_at)
    ref = _aware(now) if now is not None else utc_now()

    days = (due - ref).total_seconds() / _SECONDS_PER_DAY
    if due < ref:
        return "overdue"
    if days <= 0:
        return "today"
    if days <= 2:
        return "soon"
    return None


_DUE_BASE = {"overdue": 5, "today": 4, "soon": 3}


def has_time_token(text: str) -> bool:
    return TIME_TOKEN_RE.search(text or "") is not None


def score_urgency(
    text: str,
    due_at: datetime | None = None,
    urgency_hint: int | None = None,
    *,
    now: datetime | None = None,
) -> int:
    u = _DUE_BASE.get(due_status(due_at, now) or "", 0)

    s = (text or "").lower()
    if URGENT_WORDS_RE.search(s):
        u += 3
    if has_time_token(s):
        u += 1
    if urgency_hint is not None:
        u += int(urgency_hint)
    return clamp_score(u)


def score_importance(
    text: str,
    tags: Iterable[str] = (),
    estimate_mins: int | None = None,
    importance_hint: int | None = None,
) -> int:
    i = 0
    s = text or ""

    lowered = [t.lower() for t in (tags or ())]
    if any(t in HIGH_VALUE_TAGS for t in lowered):
        i += 3
    if OKR_RE.search(s):
        i += 2
    if (estimate_mins or 0) >= 60:
        i += 1
    if LOW_VALUE_RE.search(s):
        i -= 2
    if importance_hint is not None:
        i += int(importance_hint)
    return clamp_score(i)
