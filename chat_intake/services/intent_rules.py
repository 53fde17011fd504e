from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from chat_intake.orchestrator.intents import Intent, IntentResult

GENERAL_SCORE = 0.3
CANNED_SCORE = 1.0


def _phrases(*phrases: str) -> re.Pattern:
    alternatives = "|".join(re.escape(phrase) for phrase in phrases)
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)


# Evaluated top to bottom; the first match wins.
DEFAULT_RULES: Sequence[Tuple[re.Pattern, Intent]] = (
    (_phrases("hi", "hello", "hlo", "hey", "namaste", "kaise ho", "how are you"), Intent.GREETING),
    (
        _phrases(
            "top universities",
            "best universities",
            "top colleges",
            "top univ",
            "universities in",
            "best for",
        ),
        Intent.TOP_UNIVERSITIES,
    ),
    (_phrases("scholarship", "scholarships", "funding", "grants", "financial aid"), Intent.SCHOLARSHIPS),
    (_phrases("visa process", "visa", "apply for visa", "vfs", "immigration"), Intent.VISA),
    (
        _phrases(
            "book",
            "consult",
            "consultation",
            "book a consultation",
            "request callback",
            "request consult",
        ),
        Intent.LEAD,
    ),
)


# (region, full names matched as substrings, abbreviations matched as whole words)
REGION_VOCABULARY: Sequence[Tuple[str, Tuple[str, ...], Tuple[str, ...]]] = (
    ("canada", ("canada",), ()),
    ("australia", ("australia",), ()),
    ("singapore", ("singapore",), ()),
    ("germany", ("germany",), ()),
    ("uk", ("united kingdom", "britain", "england"), ("uk",)),
    ("usa", ("united states", "america"), ("usa", "us")),
)


class RuleBasedIntentClassifier:
    """Priority-ordered trigger matching over the latest user utterance."""

    def __init__(self, rules: Sequence[Tuple[re.Pattern, Intent]] | None = None) -> None:
        self._rules: List[Tuple[re.Pattern, Intent]] = list(rules or DEFAULT_RULES)

    def classify(self, text: Optional[str]) -> IntentResult:
        utterance = (text or "").strip()
        if not utterance:
            return IntentResult(intent=Intent.UNKNOWN, score=0.0)
        for pattern, intent in self._rules:
            if pattern.search(utterance):
                return IntentResult(intent=intent, score=CANNED_SCORE)
        return IntentResult(intent=Intent.GENERAL, score=GENERAL_SCORE)


def detect_region(text: Optional[str]) -> Optional[str]:
    """Return a coarse destination-country key mentioned in ``text``, if any."""
    if not text:
        return None
    lowered = text.lower()
    for region, names, abbreviations in REGION_VOCABULARY:
        if any(name in lowered for name in names):
            return region
        for abbreviation in abbreviations:
            if re.search(rf"\b{re.escape(abbreviation)}\b", lowered):
                return region
    return None
