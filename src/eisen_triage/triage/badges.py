# src/eisen_triage/triage/badges.py

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from .scoring import LOW_VALUE_RE, OKR_RE, due_status, has_time_token

REASONING_MAX_CHARS = 280
TRUNCATION_MARKER = "…"

_DUE_BADGES = {"overdue": "overdue", "today": "today", "soon": "due<48h"}


def compute_badges(
    text: str,
    due_at: datetime | None = None,
    tags: Iterable[str] = (),
    estimate_mins: int | None = None,
    *,
    now: datetime | None = None,
) -> list[str]:
    """
    Short signal tags in detection order:
    due badge, "time", tags (lower-cased, as given), "okr", "deep", "low".

    Duplicates are kept: a tag named "okr" plus an OKR keyword yields two "okr" badges.
    """
    badges: list[str] = []
    s = text or ""

    due = due_status(due_at, now)
    if due is not None:
        badges.append(_DUE_BADGES[due])

    if has_time_token(s):
        badges.append("time")
    badges.extend(tag.lower() for tag in (tags or ()))
    if OKR_RE.search(s):
        badges.append("okr")
    if (estimate_mins or 0) >= 60:
        badges.append("deep")
    if LOW_VALUE_RE.search(s):
        badges.append("low")
    return badges


def build_reasoning(badges: Sequence[str]) -> str:
    s = "; ".join(badges)
    if len(s) > REASONING_MAX_CHARS:
        return s[: REASONING_MAX_CHARS - 3] + TRUNCATION_MARKER
    return s


def append_refinement(reasoning: str, fragment: str) -> str:
    """Append the refiner's note as " | LLM: ..." and hard-cap the result."""
    sep = " | " if reasoning else ""
    return f"{reasoning}{sep}LLM: {fragment}"[:REASONING_MAX_CHARS]
