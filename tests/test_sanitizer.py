from __future__ import annotations

import pytest

from chat_intake.services.canned import BOOKING_PROMPT
from chat_intake.services.sanitizer import TRUNCATION_SUFFIX, ReplySanitizer


@pytest.fixture()
def sanitizer():
    return ReplySanitizer(max_chars=700)


@pytest.mark.parametrize(
    "raw",
    [
        "You should see a doctor before travelling.",
        "Get LEGAL advice on your lease.",
        "Here is some financial planning:\n- save\n- invest",
        "A good business strategy is key. " * 40,
    ],
)
def test_banned_topics_are_replaced_with_booking_prompt(sanitizer, raw):
    assert sanitizer.sanitize(raw) == BOOKING_PROMPT


def test_long_reply_is_capped_and_suffixed(sanitizer):
    raw = "\n".join(f"Line {index}: " + "x" * 200 for index in range(10))
    cleaned = sanitizer.sanitize(raw)
    assert cleaned.endswith(TRUNCATION_SUFFIX)
    assert len(cleaned) <= 700 + len(TRUNCATION_SUFFIX)
    assert "Line 4" not in cleaned


def test_single_long_line_is_hard_truncated(sanitizer):
    cleaned = sanitizer.sanitize("word " * 400)
    assert cleaned.endswith(TRUNCATION_SUFFIX)
    assert len(cleaned) <= 700 + len(TRUNCATION_SUFFIX)


def test_short_reply_is_only_trimmed(sanitizer):
    assert sanitizer.sanitize("  Toronto has cold winters.  \n") == "Toronto has cold winters."


@pytest.mark.parametrize("empty", ["", None])
def test_empty_reply_passes_through(sanitizer, empty):
    assert sanitizer.sanitize(empty) == empty


@pytest.mark.parametrize(
    "raw",
    [
        "   " + "Paragraph about campuses. " * 60,
        "\n".join("Point " + "y" * 150 for _ in range(8)),
        "See a lawyer.",
        "Short answer.",
        "a" * 694 + " legally binding offers are common " + "b" * 100,
        "x" * 693 + " doctoral programmes " + "y" * 50,
        "Campus life is lively. " * 200 + TRUNCATION_SUFFIX,
    ],
)
def test_sanitize_is_idempotent(sanitizer, raw):
    once = sanitizer.sanitize(raw)
    assert sanitizer.sanitize(once) == once


def test_reply_already_ending_with_suffix_is_still_capped(sanitizer):
    raw = "Campus life is lively. " * 200 + TRUNCATION_SUFFIX
    cleaned = sanitizer.sanitize(raw)
    assert len(raw) > 4000
    assert cleaned.endswith(TRUNCATION_SUFFIX)
    assert len(cleaned) <= 700 + len(TRUNCATION_SUFFIX)
    assert cleaned.count(TRUNCATION_SUFFIX.strip()) == 1


def test_hard_cut_does_not_split_words(sanitizer):
    raw = "a" * 694 + " legally binding offers are common " + "b" * 100
    cleaned = sanitizer.sanitize(raw)
    assert cleaned == "a" * 694 + TRUNCATION_SUFFIX
    assert "legal" not in cleaned
