# src/eisen_triage/triage/sanitize.py

"""
Redaction applied to task text before it may leave the process.

Order matters: emails go first, so the generic long-token rule at the end
cannot eat half of an address.
"""

from __future__ import annotations

import re

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"\b\+?\d[\d \-()]{6,}\b", re.ASCII)
URL_RE = re.compile(r"https?://\S+")
OPAQUE_ID_RE = re.compile(r"\b[A-Z0-9]{8,}\b", re.ASCII)

_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (EMAIL_RE, "[email]"),
    (PHONE_RE, "[phone]"),
    (URL_RE, "[url]"),
    (OPAQUE_ID_RE, "[id]"),
)


def sanitize_for_model(text: str) -> str:
    out = text or ""
    for pattern, placeholder in _RULES:
        out = pattern.sub(placeholder, out)
    return out
