from __future__ import annotations

import pytest

from chat_intake.orchestrator.intents import Intent
from chat_intake.services.canned import (
    BOOKING_PROMPT,
    CALLS_TO_ACTION,
    GLOBAL_TOP_UNIVERSITIES,
    MAX_LIST_ITEMS,
    CannedResponseBank,
)


@pytest.fixture()
def bank():
    return CannedResponseBank()


def test_top_universities_uses_region_list(bank):
    lines = bank.lookup(Intent.TOP_UNIVERSITIES, "canada")
    assert lines[0] == "• University of Toronto"
    assert len(lines) <= MAX_LIST_ITEMS


def test_top_universities_unknown_region_uses_global_list(bank):
    assert bank.lookup(Intent.TOP_UNIVERSITIES, "narnia") == list(GLOBAL_TOP_UNIVERSITIES)
    assert bank.lookup(Intent.TOP_UNIVERSITIES) == list(GLOBAL_TOP_UNIVERSITIES)


def test_render_appends_call_to_action(bank):
    rendered = bank.render(Intent.SCHOLARSHIPS)
    body, call_to_action = rendered.split("\n\n")
    assert all(line.startswith("•") for line in body.splitlines())
    assert call_to_action == CALLS_TO_ACTION[Intent.SCHOLARSHIPS]


def test_visa_steps_are_numbered(bank):
    lines = bank.lookup(Intent.VISA)
    assert [line[:2] for line in lines] == ["1.", "2.", "3."]


def test_lead_renders_booking_prompt_only(bank):
    assert bank.render(Intent.LEAD) == BOOKING_PROMPT
    assert "24 hours" in BOOKING_PROMPT


def test_lookup_rejects_non_canned_intent(bank):
    with pytest.raises(KeyError):
        bank.lookup(Intent.GENERAL)
