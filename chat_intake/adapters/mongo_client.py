from __future__ import annotations

from dataclasses import dataclass, field

try:
    from pymongo import MongoClient
except ImportError:  # pragma: no cover - optional during local dev
    MongoClient = None


@dataclass
class MongoClientFactory:
    uri: str
    db_name: str
    _client: object = field(default=None, init=False, repr=False)

    def get_collection(self, collection_name: str):
        if MongoClient is None:
            raise RuntimeError("pymongo package is required for MongoDB access")
        if self._client is None:
            self._client = MongoClient(self.uri)
        database = self._client[self.db_name]
        return database[collection_name]
