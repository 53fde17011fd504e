from __future__ import annotations

import logging
from typing import Any, Dict, List, Protocol, Sequence

try:
    from google import genai  # type: ignore[attr-defined]
    from google.genai import types as genai_types
except ImportError:  # pragma: no cover - optional dependency guard
    genai = None  # type: ignore
    genai_types = None  # type: ignore

logger = logging.getLogger(__name__)

HistoryTurn = Dict[str, Any]


class GenerativeClient(Protocol):
    def send(self, system_instruction: str, history: Sequence[HistoryTurn], message: str) -> Any:
        ...  # pragma: no cover - interface


def build_history(messages: Sequence[Dict[str, str]]) -> List[HistoryTurn]:
    """Map chat messages to backend turns. System annotations are never sent."""
    history: List[HistoryTurn] = []
    for message in messages:
        role = message.get("role")
        if role == "system":
            continue
        history.append(
            {
                "role": "model" if role == "assistant" else "user",
                "parts": [{"text": str(message.get("content", ""))}],
            }
        )
    return history


class GeminiChatClient:
    """Multi-turn chat against Gemini via the google-genai SDK."""

    def __init__(self, model_name: str, api_key: str) -> None:
        if genai is None:
            raise RuntimeError("google-genai package is required for generative replies")
        if not api_key:
            raise RuntimeError("Gemini API key is required for generative replies")
        self._client = genai.Client(api_key=api_key)
        self._model_name = model_name

    def send(self, system_instruction: str, history: Sequence[HistoryTurn], message: str) -> Any:
        contents = [
            genai_types.Content(
                role=turn["role"],
                parts=[genai_types.Part(text=part.get("text", "")) for part in turn.get("parts", [])],
            )
            for turn in history
        ]
        chat = self._client.chats.create(
            model=self._model_name,
            config=genai_types.GenerateContentConfig(
                system_instruction=system_instruction,
                response_modalities=["TEXT"],
            ),
            history=contents,
        )
        logger.debug("Sending %d history turns to %s", len(contents), self._model_name)
        return chat.send_message(message)
