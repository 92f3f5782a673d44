"""Retry and idempotency components."""

from stripe_client.resilience.idempotency import (
    IDEMPOTENCY_HEADER,
    idempotency_headers,
    new_idempotency_key,
    resolve_idempotency_key,
)
from stripe_client.resilience.retry import RetryPolicy, handle, handle_idempotent

__all__ = [
    "IDEMPOTENCY_HEADER",
    "RetryPolicy",
    "handle",
    "handle_idempotent",
    "idempotency_headers",
    "new_idempotency_key",
    "resolve_idempotency_key",
]
