from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class HandoffRequest(BaseModel):
    """Widget handoff form. Required fields are checked by the route so a gap yields 400."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(default=None, alias="sessionId")
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    note: Optional[str] = None

    def missing_fields(self) -> list[str]:
        required = {
            "sessionId": self.session_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
        }
        return [name for name, value in required.items() if not value or not str(value).strip()]


class HandoffResponse(BaseModel):
    ok: bool
    message: str


class LeadRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    name: str
    email: str
    phone: str
    note: str = ""
    source: str = Field(default="widget-handoff")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
    )

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
