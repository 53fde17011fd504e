from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from chat_intake.orchestrator.intents import Intent, IntentResult, LEAD_SUGGESTING_INTENTS


@dataclass
class ReplyState:
    session_id: str = ""
    messages: List[Dict[str, str]] = field(default_factory=list)
    utterance: str = ""
    intent: Intent = Intent.UNKNOWN
    score: float = 0.0
    region: Optional[str] = None
    raw_reply: Optional[str] = None
    reply: str = ""
    record_reply: bool = True


@dataclass
class ReplyOutcome:
    reply: str
    session_id: str
    intent: IntentResult
    failed: bool = False

    @property
    def lead_suggested(self) -> bool:
        return self.intent.intent in LEAD_SUGGESTING_INTENTS
