from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from chat_intake.schemas.conversation import ConversationEntry

logger = logging.getLogger(__name__)


class ConversationStore(Protocol):
    def append(self, session_id: str, entry: ConversationEntry) -> None:  # pragma: no cover - interface
        ...

    def last_assistant_reply(self, session_id: str) -> Optional[str]:  # pragma: no cover - interface
        ...

    def entries(self, session_id: str) -> List[ConversationEntry]:  # pragma: no cover - interface
        ...


class InMemoryConversationStore:
    """Process-local conversation log, used in tests and single-worker dev runs."""

    def __init__(self) -> None:
        self._sessions: Dict[str, List[ConversationEntry]] = {}
        self._lock = threading.Lock()

    def append(self, session_id: str, entry: ConversationEntry) -> None:
        with self._lock:
            self._sessions.setdefault(session_id, []).append(entry)

    def last_assistant_reply(self, session_id: str) -> Optional[str]:
        with self._lock:
            for entry in reversed(self._sessions.get(session_id, [])):
                if entry.role == "assistant":
                    return entry.content
        return None

    def entries(self, session_id: str) -> List[ConversationEntry]:
        with self._lock:
            return list(self._sessions.get(session_id, []))

    def count(self) -> int:
        with self._lock:
            return sum(len(entries) for entries in self._sessions.values())


class JsonFileConversationStore:
    """All sessions in a single JSON array file, rewritten on every append."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    def append(self, session_id: str, entry: ConversationEntry) -> None:
        with self._lock:
            records = self._load()
            records.append(entry.to_record())
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")

    def last_assistant_reply(self, session_id: str) -> Optional[str]:
        with self._lock:
            records = self._load()
        for record in reversed(records):
            if record.get("sessionId") == session_id and record.get("role") == "assistant":
                return record.get("content")
        return None

    def entries(self, session_id: str) -> List[ConversationEntry]:
        with self._lock:
            records = self._load()
        return [
            ConversationEntry.model_validate(record)
            for record in records
            if record.get("sessionId") == session_id
        ]

    def _load(self) -> List[dict]:
        if not self._path.exists():
            return []
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Conversation file %s is not valid JSON; treating as empty", self._path)
            return []
        if not isinstance(data, list):
            return []
        return [record for record in data if isinstance(record, dict)]


class MongoConversationStore:
    """Conversation log backed by a MongoDB collection (one document per entry)."""

    def __init__(self, collection) -> None:
        self._collection = collection

    def append(self, session_id: str, entry: ConversationEntry) -> None:
        self._collection.insert_one(entry.to_record())

    def last_assistant_reply(self, session_id: str) -> Optional[str]:
        document = self._collection.find_one(
            {"sessionId": session_id, "role": "assistant"},
            sort=[("_id", -1)],
        )
        if not document:
            return None
        return document.get("content")

    def entries(self, session_id: str) -> List[ConversationEntry]:
        cursor = self._collection.find({"sessionId": session_id}, {"_id": 0}).sort("_id", 1)
        return [ConversationEntry.model_validate(document) for document in cursor]
