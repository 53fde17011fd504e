from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

from chat_intake.orchestrator.intents import Intent

MAX_LIST_ITEMS = 6

BOOKING_PROMPT = (
    "Great! To book a free consultation please share: 1) full name, 2) email, 3) phone number. "
    "A GlobalTree counselor will contact you within 24 hours."
)

GLOBAL_TOP_UNIVERSITIES: Sequence[str] = (
    "• Massachusetts Institute of Technology (MIT)",
    "• Stanford University",
    "• Harvard University",
    "• University of Cambridge",
    "• University of Oxford",
)

REGIONAL_TOP_UNIVERSITIES: Mapping[str, Sequence[str]] = MappingProxyType(
    {
        "canada": (
            "• University of Toronto",
            "• University of British Columbia",
            "• McGill University",
            "• University of Waterloo",
        ),
        "usa": (
            "• MIT",
            "• Stanford University",
            "• Harvard University",
            "• UC Berkeley",
        ),
        "uk": (
            "• University of Oxford",
            "• University of Cambridge",
            "• Imperial College London",
            "• UCL",
        ),
        "australia": (
            "• University of Melbourne",
            "• University of Sydney",
            "• Australian National University (ANU)",
            "• UNSW Sydney",
        ),
        "germany": (
            "• Technical University of Munich",
            "• LMU Munich",
            "• Heidelberg University",
            "• Humboldt University of Berlin",
        ),
        "singapore": (
            "• National University of Singapore (NUS)",
            "• Nanyang Technological University (NTU)",
            "• Singapore Management University (SMU)",
        ),
    }
)

SCHOLARSHIPS: Sequence[str] = (
    "• Government scholarships (e.g., Fulbright, Chevening, Australia Awards)",
    "• University-specific scholarships (merit/need-based)",
    "• Country-level entrance scholarships (provincial/state schemes)",
    "• External funding bodies and foundations",
)

VISA_STEPS: Sequence[str] = (
    "1. Check visa category & eligibility on official consulate site.",
    "2. Prepare documents (passport, admission letter, financials, biometrics).",
    "3. Book appointment / pay fees / attend biometrics & wait for decision.",
)

CALLS_TO_ACTION: Dict[Intent, str] = {
    Intent.TOP_UNIVERSITIES: (
        "👉 For personalised help and eligibility checks, book a free consultation with "
        "GlobalTree (name, email, phone)."
    ),
    Intent.SCHOLARSHIPS: "👉 For scholarship matching, book a free consultation with GlobalTree (name, email, phone).",
    Intent.VISA: "👉 For a step-by-step checklist, book a free consultation with GlobalTree (name, email, phone).",
}


class CannedResponseBank:
    """Static replies for the intents answered without the generative backend."""

    def lookup(self, intent: Intent, region: Optional[str] = None) -> List[str]:
        if intent is Intent.TOP_UNIVERSITIES:
            items = REGIONAL_TOP_UNIVERSITIES.get(region or "", GLOBAL_TOP_UNIVERSITIES)
            return list(items[:MAX_LIST_ITEMS])
        if intent is Intent.SCHOLARSHIPS:
            return list(SCHOLARSHIPS[:MAX_LIST_ITEMS])
        if intent is Intent.VISA:
            return list(VISA_STEPS)
        if intent is Intent.LEAD:
            return [BOOKING_PROMPT]
        raise KeyError(f"No canned response for intent {intent.value!r}")

    def render(self, intent: Intent, region: Optional[str] = None) -> str:
        lines = self.lookup(intent, region)
        call_to_action = CALLS_TO_ACTION.get(intent)
        body = "\n".join(lines)
        if call_to_action:
            return f"{body}\n\n{call_to_action}"
        return body
