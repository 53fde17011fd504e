from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict


@dataclass
class _Bucket:
    count: int
    started_at: float


class RateLimiter:
    """Fixed-window request counter per client key."""

    def __init__(
        self,
        limit: int = 240,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = limit
        self._window = window_seconds
        self._clock = clock
        self._buckets: Dict[str, _Bucket] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> bool:
        """Count one request for ``key``; False once the window's limit is exceeded."""
        now = self._clock()
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None or now - bucket.started_at > self._window:
                bucket = _Bucket(count=0, started_at=now)
                self._buckets[key] = bucket
            bucket.count += 1
            return bucket.count <= self._limit

    def reset(self) -> None:
        with self._lock:
            self._buckets.clear()
