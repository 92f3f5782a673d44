"""Typed async client for a Stripe-style JSON/HTTP API.

Operations return either a typed value or a ``StripeError`` value; transient
failures are retried with a bounded, idempotency-safe retry loop.
"""

from stripe_client.classifier import classify
from stripe_client.config import ApiContext, StripeSettings
from stripe_client.errors import (
    ApiConnectionError,
    ApiError,
    AuthenticationError,
    CardError,
    DecodeError,
    IdempotencyError,
    InvalidRequestError,
    MaxNumberOfRetriesError,
    RateLimitError,
    StripeError,
    is_retryable,
    unwrap,
)
from stripe_client.executor import execute
from stripe_client.resilience import RetryPolicy, handle, handle_idempotent
from stripe_client.resources import plans

__all__ = [
    "ApiConnectionError",
    "ApiContext",
    "ApiError",
    "AuthenticationError",
    "CardError",
    "DecodeError",
    "IdempotencyError",
    "InvalidRequestError",
    "MaxNumberOfRetriesError",
    "RateLimitError",
    "RetryPolicy",
    "StripeError",
    "StripeSettings",
    "classify",
    "execute",
    "handle",
    "handle_idempotent",
    "is_retryable",
    "plans",
    "unwrap",
]
