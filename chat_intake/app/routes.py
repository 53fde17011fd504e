from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from chat_intake.adapters.conversation_store import ConversationStore
from chat_intake.app.config import Settings
from chat_intake.app.dependencies import (
    enforce_rate_limit,
    get_conversation_store,
    get_lead_service,
    get_orchestrator,
    get_settings,
)
from chat_intake.errors import UpstreamError, ValidationError
from chat_intake.orchestrator.graph import ReplyOrchestrator
from chat_intake.schemas.chat import AssistantMessage, ChatRequest, ChatResponse, IntentMeta, ReplyMeta
from chat_intake.schemas.conversation import ConversationLog
from chat_intake.schemas.lead import HandoffRequest, HandoffResponse
from chat_intake.services.lead import HANDOFF_CONFIRMATION, LeadService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(enforce_rate_limit)])


@router.get("/health", status_code=status.HTTP_200_OK)
def health(settings: Settings = Depends(get_settings)) -> dict:
    return {"ok": True, "app": settings.app_name, "ts": datetime.now(timezone.utc).isoformat()}


@router.post("/api/chat", response_model=ChatResponse)
def chat(
    payload: ChatRequest,
    orchestrator: ReplyOrchestrator = Depends(get_orchestrator),
):
    outcome = orchestrator.handle(
        messages=[message.model_dump() for message in payload.messages],
        session_id=payload.session_id,
    )
    if outcome.failed:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": {"role": "assistant", "content": outcome.reply},
                "sessionId": outcome.session_id,
                "error": "internal",
            },
        )
    logger.info(
        "Session %s answered with intent %s",
        outcome.session_id,
        outcome.intent.intent.value,
    )
    return ChatResponse(
        message=AssistantMessage(content=outcome.reply),
        session_id=outcome.session_id,
        meta=ReplyMeta(
            intent=IntentMeta(**outcome.intent.as_meta()),
            lead_suggested=outcome.lead_suggested,
        ),
    )


@router.post("/api/handoff", response_model=HandoffResponse)
def handoff(
    payload: HandoffRequest,
    lead_service: LeadService = Depends(get_lead_service),
) -> HandoffResponse:
    if payload.missing_fields():
        raise ValidationError("sessionId, name, email, phone required")
    try:
        lead_service.submit(
            session_id=payload.session_id,
            name=payload.name,
            email=str(payload.email),
            phone=payload.phone,
            note=payload.note,
        )
    except UpstreamError:
        logger.exception("Handoff failed for session %s", payload.session_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "handoff failed"},
        )
    return HandoffResponse(ok=True, message=HANDOFF_CONFIRMATION)


@router.get("/api/conversations", response_model=ConversationLog)
def conversations(
    session_id: Optional[str] = Query(default=None, alias="sessionId"),
    store: ConversationStore = Depends(get_conversation_store),
) -> ConversationLog:
    if not session_id:
        raise ValidationError("sessionId required")
    try:
        entries = store.entries(session_id)
    except Exception as exc:
        logger.exception("Could not load conversation for session %s", session_id)
        raise UpstreamError(f"conversation store read failed: {exc}") from exc
    return ConversationLog(session_id=session_id, entries=entries)
