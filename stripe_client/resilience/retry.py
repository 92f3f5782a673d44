"""Bounded retry loop driven by the error's retry disposition.

State machine per logical call:
- Attempting(n) -> Succeeded: the attempt returned a value
- Attempting(n) -> FailedTerminal: the error is not retryable
- Attempting(n) -> Attempting(n+1): retryable error and n < max_attempts,
  after an exponential backoff delay, stretched to a rate limit's
  ``Retry-After`` wait (never past ``max_backoff_seconds``)
- Attempting(n) -> FailedExhausted: retryable error and n == max_attempts,
  reported as ``MaxNumberOfRetriesError``

Attempts of one call never overlap. ``DecodeError`` is not a ``StripeError``
and propagates out of the loop untouched.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from stripe_client.errors import (
    MaxNumberOfRetriesError,
    RateLimitError,
    StripeError,
    is_retryable,
)
from stripe_client.resilience.idempotency import resolve_idempotency_key

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry bound and backoff schedule.

    Args:
        max_attempts: Total attempts including the first (must be > 1).
        backoff_seconds: Delay before the second attempt (must be > 0).
        backoff_factor: Multiplier applied per further attempt.
        max_backoff_seconds: Upper bound on a single delay.
    """

    max_attempts: int = 3
    backoff_seconds: float = 0.5
    backoff_factor: float = 2.0
    max_backoff_seconds: float = 30.0

    def __post_init__(self) -> None:
        if self.max_attempts < 2:
            raise ValueError("max_attempts must be greater than 1")
        if self.backoff_seconds <= 0:
            raise ValueError("backoff_seconds must be positive")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be at least 1")
        if self.max_backoff_seconds < self.backoff_seconds:
            raise ValueError("max_backoff_seconds must be >= backoff_seconds")

    def delay_for(self, attempt: int) -> float:
        """Delay after failed attempt number ``attempt`` (1-based)."""
        delay = self.backoff_seconds * self.backoff_factor ** (attempt - 1)
        return min(delay, self.max_backoff_seconds)


async def _run(
    attempt_fn: Callable[[], Awaitable[T | StripeError]],
    policy: RetryPolicy,
    operation: str,
) -> T | StripeError:
    last_error: StripeError | None = None

    for attempt in range(1, policy.max_attempts + 1):
        result = await attempt_fn()

        if not isinstance(result, StripeError):
            if attempt > 1:
                logger.info("%s succeeded on attempt %d", operation, attempt)
            return result

        if not is_retryable(result):
            logger.debug(
                "%s failed with non-retryable %s",
                operation,
                type(result).__name__,
                extra={"error_type": type(result).__name__, "attempt": attempt},
            )
            return result

        last_error = result
        if attempt < policy.max_attempts:
            delay = policy.delay_for(attempt)
            if isinstance(result, RateLimitError) and result.retry_after is not None:
                delay = min(max(delay, result.retry_after), policy.max_backoff_seconds)
            logger.warning(
                "%s failed with %s (attempt %d/%d), retrying in %.2fs",
                operation,
                type(result).__name__,
                attempt,
                policy.max_attempts,
                delay,
                extra={
                    "error_type": type(result).__name__,
                    "attempt": attempt,
                    "max_attempts": policy.max_attempts,
                },
            )
            await asyncio.sleep(delay)

    logger.error(
        "%s failed after %d attempts: %s",
        operation,
        policy.max_attempts,
        last_error,
        extra={"max_attempts": policy.max_attempts},
    )
    return MaxNumberOfRetriesError(policy.max_attempts, last_error)


async def handle(
    attempt_fn: Callable[[], Awaitable[T | StripeError]],
    policy: RetryPolicy,
    *,
    operation: str = "request",
) -> T | StripeError:
    """Retry a call that is safe to repeat without an idempotency key."""
    return await _run(attempt_fn, policy, operation)


async def handle_idempotent(
    attempt_fn: Callable[[str], Awaitable[T | StripeError]],
    policy: RetryPolicy,
    *,
    idempotency_key: str | None = None,
    operation: str = "request",
) -> T | StripeError:
    """Retry a mutating call, passing one idempotency key to every attempt.

    The key is resolved before the first attempt; a generated key is never
    replaced on retry.
    """
    key = resolve_idempotency_key(idempotency_key)
    return await _run(lambda: attempt_fn(key), policy, operation)
