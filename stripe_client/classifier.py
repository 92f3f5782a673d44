"""Classify non-2xx responses into typed errors.

The remote wraps failures as ``{"error": {"type", "message"?, "param"?}}``.
``type`` picks the variant; unrecognized types become ``ApiError`` so that new
remote error kinds never break decoding. When the body carries no usable error
object, the status code decides.
"""

from __future__ import annotations

import logging
from typing import Any

from stripe_client.errors import (
    ApiConnectionError,
    ApiError,
    AuthenticationError,
    CardError,
    IdempotencyError,
    InvalidRequestError,
    RateLimitError,
    StripeError,
)

logger = logging.getLogger(__name__)

_ERROR_TYPES: dict[str, type[StripeError]] = {
    "invalid_request_error": InvalidRequestError,
    "api_connection_error": ApiConnectionError,
    "card_error": CardError,
    "api_error": ApiError,
    "rate_limit_error": RateLimitError,
    "authentication_error": AuthenticationError,
    "idempotency_error": IdempotencyError,
}

_STATUS_FALLBACK: dict[int, type[StripeError]] = {
    400: InvalidRequestError,
    401: AuthenticationError,
    402: CardError,
    403: InvalidRequestError,
    404: InvalidRequestError,
    409: InvalidRequestError,
    429: RateLimitError,
}


def _optional_str(payload: dict, key: str) -> str | None:
    value = payload.get(key)
    return value if isinstance(value, str) else None


def classify(status_code: int, body: Any) -> StripeError:
    """Map a failed response to a ``StripeError`` instance.

    Parameters
    ----------
    status_code:
        HTTP status of the response.
    body:
        Parsed JSON body, or ``None`` when the body was not valid JSON.
    """
    error = body.get("error") if isinstance(body, dict) else None

    if not isinstance(error, dict):
        error_cls = _STATUS_FALLBACK.get(status_code, ApiError)
        logger.debug(
            "No error object in %d response, classified by status as %s",
            status_code,
            error_cls.__name__,
        )
        return error_cls(status_code=status_code, body=body)

    error_type = error.get("type")
    error_cls = _ERROR_TYPES.get(error_type) if isinstance(error_type, str) else None
    if error_cls is None:
        logger.warning("Unrecognized error type %r, treating as api_error", error_type)
        error_cls = ApiError

    message = _optional_str(error, "message")
    param = _optional_str(error, "param")

    if error_cls is CardError:
        return CardError(
            message,
            status_code=status_code,
            param=param,
            body=body,
            code=_optional_str(error, "code"),
            decline_code=_optional_str(error, "decline_code"),
        )
    return error_cls(message, status_code=status_code, param=param, body=body)
