from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


class Intent(str, Enum):
    GREETING = "greeting"
    GREETING_REPEAT = "greeting_repeat"
    TOP_UNIVERSITIES = "top_universities"
    SCHOLARSHIPS = "scholarships"
    VISA = "visa"
    LEAD = "lead"
    GENERAL = "general"
    UNKNOWN = "unknown"

    @classmethod
    def from_label(cls, label: str) -> "Intent":
        try:
            return cls(label)
        except ValueError as exc:
            raise ValueError(f"Unsupported intent label: {label}") from exc


CANNED_INTENTS = frozenset(
    {Intent.TOP_UNIVERSITIES, Intent.SCHOLARSHIPS, Intent.VISA, Intent.LEAD}
)
LEAD_SUGGESTING_INTENTS = frozenset({Intent.LEAD, Intent.VISA})


@dataclass(frozen=True)
class IntentResult:
    intent: Intent
    score: float = 0.0

    def as_meta(self) -> dict:
        payload = asdict(self)
        payload["intent"] = self.intent.value
        return payload
