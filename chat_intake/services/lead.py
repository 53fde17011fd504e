from __future__ import annotations

import logging
from typing import Optional

from chat_intake.adapters.conversation_store import ConversationStore
from chat_intake.adapters.lead_store import LeadSink
from chat_intake.errors import UpstreamError, ValidationError
from chat_intake.schemas.conversation import ConversationEntry
from chat_intake.schemas.lead import LeadRecord

logger = logging.getLogger(__name__)

HANDOFF_CONFIRMATION = "Handoff requested. Our counselor will contact you shortly."
HANDOFF_SOURCE = "widget-handoff"


class LeadService:
    """Forwards handoff requests to the lead sink and notes them in the session log."""

    def __init__(self, sink: LeadSink, conversation_store: ConversationStore) -> None:
        self._sink = sink
        self._conversations = conversation_store

    def submit(
        self,
        session_id: str,
        name: str,
        email: str,
        phone: str,
        note: Optional[str] = None,
    ) -> LeadRecord:
        if not all(value and value.strip() for value in (session_id, name, email, phone)):
            raise ValidationError("sessionId, name, email, phone required")

        lead = LeadRecord(
            session_id=session_id,
            name=name.strip(),
            email=email.strip(),
            phone=phone.strip(),
            note=note or f"Handoff from session {session_id}",
            source=HANDOFF_SOURCE,
        )
        try:
            self._sink.save(lead.to_record())
        except UpstreamError:
            raise
        except Exception as exc:
            raise UpstreamError(f"Lead sink failed: {exc}") from exc
        logger.info("Lead forwarded for session %s", session_id)

        self._record_handoff(lead)
        return lead

    def _record_handoff(self, lead: LeadRecord) -> None:
        entry = ConversationEntry(
            session_id=lead.session_id,
            role="system",
            content=f"Handoff requested: {lead.name} {lead.email} {lead.phone}",
        )
        try:
            self._conversations.append(lead.session_id, entry)
        except Exception:
            logger.exception("Failed to record handoff for session %s", lead.session_id)
