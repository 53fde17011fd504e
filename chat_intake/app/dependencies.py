from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Depends, HTTPException, Request, status

from chat_intake.app.config import get_settings
from chat_intake.adapters.conversation_store import (
    ConversationStore,
    InMemoryConversationStore,
    JsonFileConversationStore,
    MongoConversationStore,
)
from chat_intake.adapters.lead_store import JsonFileLeadStore, LeadSink, MongoLeadStore
from chat_intake.adapters.mongo_client import MongoClientFactory
from chat_intake.adapters.sheets_client import SheetsWebhookClient
from chat_intake.orchestrator.graph import ReplyOrchestrator
from chat_intake.services.generation import GeminiChatClient
from chat_intake.services.intent_rules import RuleBasedIntentClassifier
from chat_intake.services.lead import LeadService
from chat_intake.services.rate_limit import RateLimiter
from chat_intake.services.sanitizer import ReplySanitizer


@lru_cache(maxsize=1)
def get_mongo_factory() -> MongoClientFactory:
    settings = get_settings()
    return MongoClientFactory(settings.mongo_uri, settings.mongo_database)


@lru_cache(maxsize=1)
def get_conversation_store() -> ConversationStore:
    settings = get_settings()
    backend = settings.conversation_backend.lower()
    if backend == "mongo":
        collection = get_mongo_factory().get_collection(settings.conversations_collection)
        return MongoConversationStore(collection)
    if backend == "json":
        return JsonFileConversationStore(Path(settings.conversations_file))
    return InMemoryConversationStore()


@lru_cache(maxsize=1)
def get_lead_sink() -> LeadSink:
    settings = get_settings()
    backend = settings.lead_backend.lower()
    if backend == "sheets":
        return SheetsWebhookClient(url=settings.sheets_webhook_url, token=settings.sheets_webhook_token)
    if backend == "mongo":
        return MongoLeadStore(get_mongo_factory().get_collection(settings.leads_collection))
    return JsonFileLeadStore(Path(settings.leads_file))


@lru_cache(maxsize=1)
def get_generative_client() -> GeminiChatClient:
    settings = get_settings()
    return GeminiChatClient(model_name=settings.gemini_model, api_key=settings.gemini_api_key)


@lru_cache(maxsize=1)
def get_rate_limiter() -> RateLimiter:
    settings = get_settings()
    return RateLimiter(
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


def enforce_rate_limit(request: Request, limiter: RateLimiter = Depends(get_rate_limiter)) -> None:
    forwarded = request.headers.get("x-forwarded-for", "")
    client_key = forwarded.split(",")[0].strip() or (request.client.host if request.client else "local")
    if not limiter.hit(client_key):
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail="Rate limit exceeded")


def get_lead_service(
    sink: LeadSink = Depends(get_lead_sink),
    store: ConversationStore = Depends(get_conversation_store),
) -> LeadService:
    return LeadService(sink=sink, conversation_store=store)


@lru_cache(maxsize=1)
def get_orchestrator() -> ReplyOrchestrator:
    settings = get_settings()
    classifier = RuleBasedIntentClassifier()
    return ReplyOrchestrator(
        conversation_store=get_conversation_store(),
        intent_classifier=classifier.classify,
        generative_client=get_generative_client,
        system_instruction=settings.system_instruction,
        brand_name=settings.brand_name,
        sanitizer=ReplySanitizer(max_chars=settings.max_reply_chars),
    )
