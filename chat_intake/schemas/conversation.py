from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant", "system"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationEntry(BaseModel):
    """One append-only record in a session's conversation log."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    timestamp: datetime = Field(default_factory=_utcnow)
    role: Role
    content: str

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ConversationLog(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    entries: List[ConversationEntry] = Field(default_factory=list)
