from __future__ import annotations

import re
from typing import Optional, Sequence

from chat_intake.services.canned import BOOKING_PROMPT

DEFAULT_MAX_CHARS = 700
MAX_LINES = 4
TRUNCATION_SUFFIX = "\n\nFor full details, please book a free consultation with GlobalTree."

_WORD_CHAR = re.compile(r"\w")
_TRAILING_WORD = re.compile(r"\w+$")

BANNED_TERMS: Sequence[str] = (
    "medical",
    "legal",
    "financial",
    "therapy",
    "doctor",
    "lawyer",
    "business strategy",
)


class ReplySanitizer:
    """Enforces topic and length policy on freeform generative replies."""

    def __init__(
        self,
        max_chars: int = DEFAULT_MAX_CHARS,
        banned_terms: Sequence[str] = BANNED_TERMS,
        replacement: str = BOOKING_PROMPT,
        suffix: str = TRUNCATION_SUFFIX,
    ) -> None:
        alternatives = "|".join(re.escape(term) for term in banned_terms)
        self._banned = re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)
        self._max_chars = max_chars
        self._replacement = replacement
        self._suffix = suffix

    @property
    def suffix(self) -> str:
        return self._suffix

    def sanitize(self, reply: Optional[str]) -> Optional[str]:
        if not reply:
            return reply
        if self._banned.search(reply):
            return self._replacement
        stripped = reply.strip()
        marker = self._suffix.strip()
        if marker and stripped.endswith(marker):
            body = stripped[: -len(marker)].strip()
            if len(body) <= self._max_chars:
                return body + self._suffix if body else marker
            return self._truncate(body)
        if len(stripped) > self._max_chars:
            return self._truncate(stripped)
        return stripped

    def _truncate(self, reply: str) -> str:
        lines = [line for line in reply.split("\n") if line]
        shortened = "\n".join(lines[:MAX_LINES])
        if len(shortened) > self._max_chars:
            cut = shortened[: self._max_chars]
            # never leave a word fragment behind ("legally" -> "legal")
            if _WORD_CHAR.match(shortened[self._max_chars]) and _WORD_CHAR.match(cut[-1]):
                cut = _TRAILING_WORD.sub("", cut) or cut
            shortened = cut
        return shortened.strip() + self._suffix
