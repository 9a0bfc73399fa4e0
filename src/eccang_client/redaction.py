"""
Helpers for audit payload redaction.

Walks request and response payloads and masks values stored under keys that
look like credentials or personal contact data. Matching is a case-insensitive
substring test against ``SENSITIVE_KEYS``; it is a heuristic, so new field
names that carry secrets must be added to the list explicitly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

SENSITIVE_KEYS = (
    "token",
    "secret",
    "password",
    "telephone",
    "mobile",
    "email",
    "appToken",
    "appKey",
)

MASK = "***"

_LOWERED_KEYS = tuple(key.lower() for key in SENSITIVE_KEYS)


def is_sensitive_key(key: Any) -> bool:
    lowered = str(key).lower()
    return any(sensitive in lowered for sensitive in _LOWERED_KEYS)


def mask_value(value: Any) -> str:
    """Mask a value stored under a sensitive key."""
    if isinstance(value, str) and len(value) > 3:
        return f"{value[:1]}{MASK}{value[-1:]}"
    return MASK


def _dump_model(model: BaseModel) -> Any:
    try:
        return model.model_dump(mode="json", exclude_unset=True)
    except (PydanticSerializationError, TypeError, ValueError):
        pass
    try:
        return model.model_dump(exclude_unset=True)
    except (PydanticSerializationError, TypeError, ValueError):
        return MASK


def _redact(value: Any, active: set[int]) -> Any:
    if isinstance(value, BaseModel):
        value = _dump_model(value)

    if not isinstance(value, (Mapping, list, tuple)):
        return value

    # A container already on the current path is a cycle.
    marker = id(value)
    if marker in active:
        return MASK
    active.add(marker)
    try:
        if isinstance(value, Mapping):
            sanitized: dict[Any, Any] = {}
            for key, item in value.items():
                if is_sensitive_key(key):
                    sanitized[key] = mask_value(item)
                    continue
                sanitized[key] = _redact(item, active)
            return sanitized
        return [_redact(item, active) for item in value]
    finally:
        active.discard(marker)


def redact_sensitive(value: Any) -> Any:
    """Return a redacted deep copy of ``value``; the input is never mutated.

    Cyclic references and models that cannot be dumped come back as ``MASK``
    rather than raising.
    """
    return _redact(value, set())
