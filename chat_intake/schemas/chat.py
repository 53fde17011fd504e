from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    role: str = Field(default="user", description="Message role such as user, assistant, system")
    content: str = Field(default="", description="Plain text content")


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatMessage] = Field(default_factory=list)
    session_id: Optional[str] = Field(default=None, alias="sessionId")


class IntentMeta(BaseModel):
    intent: str
    score: float


class ReplyMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    intent: IntentMeta
    lead_suggested: bool = Field(default=False, alias="leadSuggested")


class AssistantMessage(BaseModel):
    role: str = "assistant"
    content: str


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: AssistantMessage
    session_id: str = Field(..., alias="sessionId")
    meta: ReplyMeta
