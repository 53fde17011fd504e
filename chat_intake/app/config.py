from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are GlobalTree's short-answer assistant. Always keep replies concise, factual, and action-oriented.\n"
    "Prefer 3-6 bullets for list queries and max 3 numbered steps for process queries.\n"
    "Do not ask multi-domain questions (no medical/business/legal prompts). "
    "If user asks for a consultation, ask only: name, email, phone."
)


class Settings(BaseSettings):
    """Central application configuration."""

    app_name: str = Field(default="GlobalTree Chat Intake")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    brand_name: str = Field(default="GlobalTree")

    # Generative backend
    gemini_api_key: str = Field(default="")
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        validation_alias=AliasChoices("GEMINI_MODEL", "GEMINI_CHAT_MODEL"),
    )
    system_instruction: str = Field(
        default=DEFAULT_SYSTEM_INSTRUCTION,
        validation_alias=AliasChoices("SYSTEM_INSTRUCTION"),
    )
    max_reply_chars: int = Field(default=700)

    # Conversation log
    conversation_backend: str = Field(default="json")
    conversations_file: str = Field(default="conversations.json")
    conversations_collection: str = Field(default="conversations")

    # Leads
    lead_backend: str = Field(default="json")
    leads_file: str = Field(default="leads.json")
    leads_collection: str = Field(default="leads")
    sheets_webhook_url: str = Field(default="")
    sheets_webhook_token: str = Field(default="")

    # MongoDB
    mongo_uri: str = Field(default="mongodb://localhost:27017")
    mongo_database: str = Field(default="chat_intake")

    # Transport
    rate_limit_requests: int = Field(default=240)
    rate_limit_window_seconds: float = Field(default=60.0)
    allowed_origins: List[str] = Field(
        default_factory=list,
        validation_alias="ALLOWED_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
