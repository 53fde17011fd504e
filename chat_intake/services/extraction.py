from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Set

logger = logging.getLogger(__name__)

PREFERRED_KEYS = (
    "text",
    "content",
    "outputText",
    "output_text",
    "message",
    "candidates",
    "choices",
    "parts",
    "delta",
    "output",
    "response",
)
PRIMARY_MIN_LENGTH = 8
FALLBACK_MIN_LENGTH = 1

_SCALARS = (int, float, bool, bytes, complex)


def extract_reply_text(response: Any) -> Optional[str]:
    """Pull a plausible answer out of a generative backend response.

    The SDK response shape shifts between versions, so this never assumes a
    schema: direct ``text``/``output_text`` fields first, then a depth-first
    walk favouring :data:`PREFERRED_KEYS`, first with a minimum length and
    then accepting any non-empty string. Returns ``None`` instead of raising.
    """
    if response is None:
        return None
    if isinstance(response, str):
        return response.strip() or None
    for key in ("text", "outputText", "output_text"):
        direct = _read(response, key)
        if isinstance(direct, str) and direct.strip():
            return direct.strip()
    for min_length in (PRIMARY_MIN_LENGTH, FALLBACK_MIN_LENGTH):
        found = find_first_text(response, min_length=min_length)
        if found:
            return found
    return None


def find_first_text(value: Any, min_length: int = 1) -> Optional[str]:
    visited: Set[int] = set()
    try:
        return _walk(value, min_length, visited)
    except RecursionError:
        logger.warning("Response payload too deeply nested for text extraction")
        return None


def _walk(value: Any, min_length: int, visited: Set[int]) -> Optional[str]:
    if value is None or isinstance(value, _SCALARS):
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if len(stripped) >= min_length else None
    if id(value) in visited:
        return None
    visited.add(id(value))

    if isinstance(value, (list, tuple, set, frozenset)):
        return _walk_many(value, min_length, visited)

    for key in PREFERRED_KEYS:
        if _has(value, key):
            found = _walk(_read(value, key), min_length, visited)
            if found:
                return found
    for child in _children(value):
        found = _walk(child, min_length, visited)
        if found:
            return found
    return None


def _walk_many(items: Iterable[Any], min_length: int, visited: Set[int]) -> Optional[str]:
    for item in items:
        found = _walk(item, min_length, visited)
        if found:
            return found
    return None


def _has(value: Any, key: str) -> bool:
    if isinstance(value, dict):
        return key in value
    try:
        return key in _fields(value)
    except Exception:  # noqa: BLE001 - foreign objects may misbehave on introspection
        return False


def _read(value: Any, key: str) -> Any:
    try:
        if isinstance(value, dict):
            return value.get(key)
        return getattr(value, key, None)
    except Exception:  # noqa: BLE001 - SDK properties can raise on partial responses
        return None


def _children(value: Any) -> list:
    if isinstance(value, dict):
        return list(value.values())
    try:
        return [_read(value, key) for key in _fields(value)]
    except Exception:  # noqa: BLE001
        return []


def _fields(value: Any) -> list:
    """Public data attributes of an arbitrary object (pydantic models included)."""
    model_fields = getattr(type(value), "model_fields", None)
    if isinstance(model_fields, dict):
        return list(model_fields)
    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, dict):
        return [name for name in attributes if not name.startswith("_")]
    return []
