from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Protocol


class LeadSink(Protocol):
    def save(self, record: Dict[str, Any]) -> Dict[str, Any]:  # pragma: no cover - interface
        ...


class JsonFileLeadStore:
    """Appends lead records to a local JSON array file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    def save(self, record: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            records = self.load()
            records.append(record)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
        return {"stored": len(records)}

    def load(self) -> List[Dict[str, Any]]:
        if not self._path.exists():
            return []
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return []
        data = json.loads(raw)
        return list(data) if isinstance(data, list) else []


class MongoLeadStore:
    def __init__(self, collection) -> None:
        self._collection = collection

    def save(self, record: Dict[str, Any]) -> Dict[str, Any]:
        result = self._collection.insert_one(dict(record))
        return {"id": str(result.inserted_id)}
