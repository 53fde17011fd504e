from __future__ import annotations

from fastapi.testclient import TestClient

from chat_intake.app.dependencies import get_rate_limiter
from chat_intake.app.main import app
from chat_intake.services.rate_limit import RateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_limit_applies_per_key_and_resets_after_window():
    clock = FakeClock()
    limiter = RateLimiter(limit=2, window_seconds=60, clock=clock)

    assert limiter.hit("10.0.0.1") is True
    assert limiter.hit("10.0.0.1") is True
    assert limiter.hit("10.0.0.1") is False
    assert limiter.hit("10.0.0.2") is True

    clock.now = 61.0
    assert limiter.hit("10.0.0.1") is True


def test_reset_clears_counters():
    limiter = RateLimiter(limit=1)
    limiter.hit("a")
    assert limiter.hit("a") is False
    limiter.reset()
    assert limiter.hit("a") is True


def test_api_returns_429_when_exceeded():
    limiter = RateLimiter(limit=1)
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    try:
        client = TestClient(app)
        assert client.get("/health").status_code == 200
        response = client.get("/health")
        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded"}
    finally:
        app.dependency_overrides.pop(get_rate_limiter, None)
