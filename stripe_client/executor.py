"""Single-attempt request execution against the remote API.

One call to ``execute`` is one HTTP round trip. The outcome is either the
decoded typed value or a ``StripeError`` value:
- transport failures (connect, read, timeout) -> ``ApiConnectionError``
- non-2xx responses -> whatever ``classify`` makes of the body
- 2xx responses that do not match the expected schema -> ``DecodeError`` is
  raised, since that means the client model is out of sync with the remote

SECURITY: Never logs the full API key; the Authorization header stays in-memory.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, TypeVar

import httpx

from stripe_client.classifier import classify
from stripe_client.config.context import ApiContext
from stripe_client.errors import (
    ApiConnectionError,
    AuthenticationError,
    DecodeError,
    RateLimitError,
    StripeError,
)
from stripe_client.logging_config import mask_api_key
from stripe_client.resilience.idempotency import idempotency_headers

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUPPORTED_METHODS = frozenset({"GET", "POST", "DELETE"})


def build_headers(context: ApiContext, method: str, idempotency_key: str | None) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {context.api_key}"}
    if context.api_version is not None:
        headers["Stripe-Version"] = context.api_version
    headers.update(idempotency_headers(method, idempotency_key))
    return headers


def _parse_error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def _retry_after(response: httpx.Response) -> float | None:
    """Seconds from a numeric ``Retry-After`` header; HTTP dates are ignored."""
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


async def _send(
    client: httpx.AsyncClient,
    context: ApiContext,
    method: str,
    url: str | httpx.URL,
    params: dict[str, str] | None,
    headers: dict[str, str],
) -> httpx.Response:
    return await client.request(
        method,
        url,
        data=params if method == "POST" else None,
        headers=headers,
        timeout=context.timeout_seconds,
    )


async def execute(
    context: ApiContext,
    method: str,
    url: str | httpx.URL,
    decode: Callable[[Any], T],
    *,
    params: dict[str, str] | None = None,
    idempotency_key: str | None = None,
) -> T | StripeError:
    """Issue one request and decode its outcome.

    Parameters
    ----------
    context:
        Credential, endpoint and transport settings.
    method:
        GET, POST or DELETE.
    url:
        Absolute resource URL, including any query string.
    decode:
        Converts the parsed success body into the typed value; raises
        ``DecodeError`` on schema mismatch.
    params:
        Form parameters, sent as the body of POST requests only.
    idempotency_key:
        Attached to POST and DELETE requests when given; ignored for GET.

    Raises
    ------
    DecodeError
        If a 2xx body is not JSON or does not match the expected schema.
    """
    method = method.upper()
    if method not in SUPPORTED_METHODS:
        raise ValueError(f"unsupported method {method!r}")
    if params is not None and method != "POST":
        raise ValueError(f"form parameters are only sent with POST, not {method}")

    headers = build_headers(context, method, idempotency_key)
    started = time.monotonic()

    try:
        if context.http_client is not None:
            response = await _send(context.http_client, context, method, url, params, headers)
        else:
            async with httpx.AsyncClient() as client:
                response = await _send(client, context, method, url, params, headers)
    except httpx.TransportError as exc:
        logger.warning(
            "%s %s failed before a response: %s",
            method,
            url,
            exc,
            extra={"method": method, "url": str(url), "error_type": type(exc).__name__},
        )
        return ApiConnectionError(str(exc) or None)

    duration_ms = round((time.monotonic() - started) * 1000, 1)
    logger.debug(
        "%s %s -> %d",
        method,
        url,
        response.status_code,
        extra={
            "method": method,
            "url": str(url),
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )

    if not response.is_success:
        error = classify(response.status_code, _parse_error_body(response))
        if isinstance(error, AuthenticationError):
            logger.warning("Authentication failed for API key %s", mask_api_key(context.api_key))
        elif isinstance(error, RateLimitError):
            error.retry_after = _retry_after(response)
        return error

    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"response body is not valid JSON: {exc}") from exc

    return decode(payload)
