"""Idempotency keys for mutating calls.

A key identifies one logical mutating intent. The remote treats a repeated
request carrying the same key as a duplicate, so a key must stay fixed across
every retry of one call and must never be shared between distinct calls.
"""

from __future__ import annotations

import uuid

IDEMPOTENCY_HEADER = "Idempotency-Key"
MAX_KEY_LENGTH = 255

_KEYED_METHODS = frozenset({"POST", "DELETE"})


def new_idempotency_key() -> str:
    return str(uuid.uuid4())


def resolve_idempotency_key(key: str | None) -> str:
    """Return the caller's key, or a fresh one when none was supplied."""
    if key is None:
        return new_idempotency_key()
    if not key or len(key) > MAX_KEY_LENGTH:
        raise ValueError(f"idempotency key must be 1-{MAX_KEY_LENGTH} characters")
    return key


def idempotency_headers(method: str, key: str | None) -> dict[str, str]:
    """Header carrying the key, for POST and DELETE only."""
    if key is None or method.upper() not in _KEYED_METHODS:
        return {}
    return {IDEMPOTENCY_HEADER: key}
