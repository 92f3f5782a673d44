"""Typed error hierarchy for remote API failures.

Every failure the remote API (or the transport under it) can report maps to one
``StripeError`` subclass. Errors are *returned* as values by the request
executor and the retry handler, so callers can pattern-match on the variant:

    result = await plans.get(ctx, "gold")
    match result:
        case CardError(param=param): ...
        case StripeError(): ...
        case Plan(): ...

Retry disposition is a class attribute, so it is a pure function of the variant.
Subclasses that do not declare it inherit ``retryable = False``.

``DecodeError`` is deliberately NOT a ``StripeError``: it signals that the client
model and the remote schema disagree, which no retry can fix.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

T = TypeVar("T")


class StripeError(Exception):
    """Base error for all failures reported by (or on the way to) the remote API."""

    __match_args__ = ("message",)

    retryable: ClassVar[bool] = False
    status_code: int | None = None
    message: str = "Remote API error"

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        param: str | None = None,
        body: Any = None,
    ) -> None:
        self.message = message or self.__class__.message
        if status_code is not None:
            self.status_code = status_code
        self.param = param
        self.body = body
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, "
            f"status_code={self.status_code!r}, param={self.param!r})"
        )

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (
            self.message == other.message  # type: ignore[attr-defined]
            and self.status_code == other.status_code  # type: ignore[attr-defined]
            and self.param == other.param  # type: ignore[attr-defined]
        )

    __hash__ = Exception.__hash__


class InvalidRequestError(StripeError):
    """The request had invalid parameters."""

    status_code = 400
    message = "Invalid request"


class AuthenticationError(StripeError):
    """The API key was missing, revoked or wrong."""

    status_code = 401
    message = "Authentication failed"


class CardError(StripeError):
    """The payment instrument was rejected.

    ``param`` names the offending field in wire (snake_case) form.
    """

    __match_args__ = ("message", "param")

    status_code = 402
    message = "Card was declined"

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        param: str | None = None,
        body: Any = None,
        code: str | None = None,
        decline_code: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, param=param, body=body)
        self.code = code
        self.decline_code = decline_code


class IdempotencyError(StripeError):
    """An idempotency key was reused with different request parameters."""

    status_code = 400
    message = "Idempotency key reused with different parameters"


class RateLimitError(StripeError):
    """Too many requests hit the API too quickly.

    ``retry_after`` holds the server's requested wait in seconds, when given.
    """

    retryable = True
    status_code = 429
    message = "Rate limit exceeded"
    retry_after: float | None = None


class ApiError(StripeError):
    """Opaque server-side failure, including unrecognized error types."""

    retryable = True
    status_code = 500
    message = "Remote API error"


class ApiConnectionError(StripeError):
    """The request never got a response (connect failure, timeout, reset)."""

    retryable = True
    status_code = None
    message = "Could not connect to the remote API"


class MaxNumberOfRetriesError(StripeError):
    """Retries were exhausted on a retryable failure."""

    __match_args__ = ("attempts", "last_error")

    status_code = None
    message = "Maximum number of retries reached"

    def __init__(self, attempts: int, last_error: StripeError | None = None) -> None:
        super().__init__(
            f"Gave up after {attempts} attempts: {last_error.message if last_error else 'unknown error'}"
        )
        self.attempts = attempts
        self.last_error = last_error


class DecodeError(ValueError):
    """A response body did not match the expected schema."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(f"field '{field}': {message}" if field else message)


def is_retryable(error: StripeError) -> bool:
    """Return True if the failure is transient and the call may be repeated."""
    return type(error).retryable


def unwrap(result: T | StripeError) -> T:
    """Return a successful result, or raise it when it is a ``StripeError``."""
    if isinstance(result, StripeError):
        raise result
    return result
