from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from chat_intake.adapters.conversation_store import InMemoryConversationStore
from chat_intake.app.dependencies import get_lead_service, get_rate_limiter
from chat_intake.app.main import app
from chat_intake.errors import UpstreamError
from chat_intake.services.lead import HANDOFF_CONFIRMATION, LeadService
from chat_intake.services.rate_limit import RateLimiter


class MemoryLeadSink:
    def __init__(self, fail: bool = False) -> None:
        self.saved = []
        self.fail = fail

    def save(self, record):
        if self.fail:
            raise UpstreamError("webhook returned 502")
        self.saved.append(record)
        return {"stored": len(self.saved)}


@pytest.fixture()
def sink():
    return MemoryLeadSink()


@pytest.fixture()
def conversations():
    return InMemoryConversationStore()


@pytest.fixture()
def client(sink, conversations):
    lead_service = LeadService(sink=sink, conversation_store=conversations)
    overrides = {
        get_lead_service: lambda: lead_service,
        get_rate_limiter: lambda: RateLimiter(limit=1000),
    }
    app.dependency_overrides.update(overrides)
    try:
        yield TestClient(app)
    finally:
        for key in overrides:
            app.dependency_overrides.pop(key, None)


def _payload(**overrides):
    payload = {
        "sessionId": "sess-42",
        "name": "Asha Karki",
        "email": "asha@example.com",
        "phone": "+977 9800000000",
    }
    payload.update(overrides)
    return {key: value for key, value in payload.items() if value is not None}


def test_handoff_success(client: TestClient, sink, conversations):
    response = client.post("/api/handoff", json=_payload(note="Interested in Canada"))

    assert response.status_code == 200
    assert response.json() == {"ok": True, "message": HANDOFF_CONFIRMATION}
    assert sink.saved[0]["email"] == "asha@example.com"
    assert sink.saved[0]["note"] == "Interested in Canada"
    assert sink.saved[0]["source"] == "widget-handoff"
    assert "createdAt" in sink.saved[0]
    entries = conversations.entries("sess-42")
    assert entries[-1].role == "system"
    assert entries[-1].content.startswith("Handoff requested: Asha Karki")


def test_handoff_without_phone_is_rejected(client: TestClient, sink):
    response = client.post("/api/handoff", json=_payload(phone=None))
    assert response.status_code == 400
    assert "phone" in response.json()["error"]
    assert sink.saved == []


def test_handoff_with_blank_name_is_rejected(client: TestClient, sink):
    response = client.post("/api/handoff", json=_payload(name="  "))
    assert response.status_code == 400
    assert sink.saved == []


def test_handoff_with_invalid_email_is_rejected(client: TestClient):
    response = client.post("/api/handoff", json=_payload(email="not-an-email"))
    assert response.status_code == 400


def test_handoff_downstream_failure_returns_500(client: TestClient, sink, conversations):
    sink.fail = True
    response = client.post("/api/handoff", json=_payload())

    assert response.status_code == 500
    assert response.json() == {"error": "handoff failed"}
    assert conversations.entries("sess-42") == []
