# tests/test_sanitize.py

from __future__ import annotations

import pytest

from eisen_triage.triage.sanitize import sanitize_for_model


def test_email_and_phone() -> None:
    assert sanitize_for_model("contact me at a@b.com or 415-555-0101") == "contact me at [email] or [phone]"


def test_international_phone() -> None:
    assert sanitize_for_model("call 44 20 7946 0958") == "call [phone]"


def test_url_is_redacted_up_to_whitespace() -> None:
    assert sanitize_for_model("see https://example.com/doc?x=y first") == "see [url] first"


def test_long_uppercase_token_becomes_id() -> None:
    assert sanitize_for_model("ticket ABCD1234EF blocked") == "ticket [id] blocked"


def test_short_or_lowercase_tokens_survive() -> None:
    text = "fix ABC123 and deadbeefcafe"
    assert sanitize_for_model(text) == text


def test_email_is_not_split_by_id_rule() -> None:
    assert sanitize_for_model("mail JOHNSMITH99@EXAMPLE.COM") == "mail [email]"


@pytest.mark.parametrize(
    "text",
    ["buy milk", "Q3 OKR review at 10:30", "plan milestone with team", ""],
)
def test_sanitizing_clean_text_is_idempotent(text: str) -> None:
    once = sanitize_for_model(text)
    assert once == text
    assert sanitize_for_model(once) == once


def test_sanitizing_twice_keeps_placeholders() -> None:
    once = sanitize_for_model("a@b.com 415-555-0101 https://x.io ZZZZ99999")
    assert sanitize_for_model(once) == once
