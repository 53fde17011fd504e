from __future__ import annotations

import logging

from chat_intake.adapters.conversation_store import ConversationStore

logger = logging.getLogger(__name__)

DUPLICATE_ACK = "I've already shared that - would you like help booking a consultation?"


class DuplicateSuppressor:
    """Replaces a reply that would repeat the session's last assistant reply verbatim."""

    def __init__(self, store: ConversationStore, acknowledgment: str = DUPLICATE_ACK) -> None:
        self._store = store
        self._acknowledgment = acknowledgment

    def suppress(self, session_id: str, candidate: str) -> str:
        try:
            previous = self._store.last_assistant_reply(session_id)
        except Exception:
            logger.exception("Could not read last reply for session %s; skipping duplicate check", session_id)
            return candidate
        if previous is not None and previous.strip() == (candidate or "").strip():
            logger.info("Suppressing duplicate reply for session %s", session_id)
            return self._acknowledgment
        return candidate
