"""Per-process call context threaded explicitly through every operation."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from stripe_client.resilience.retry import RetryPolicy

DEFAULT_ENDPOINT = "https://api.stripe.com"


@dataclass(frozen=True)
class ApiContext:
    """Credential, endpoint and transport settings for remote calls.

    Immutable; build once and share between concurrent calls.
    ``http_client`` is optional: when absent a short-lived client is opened
    per attempt.
    """

    api_key: str = field(repr=False)
    endpoint: str = DEFAULT_ENDPOINT
    api_version: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    http_client: httpx.AsyncClient | None = field(default=None, repr=False, compare=False)

    def url(self, path: str) -> str:
        return self.endpoint.rstrip("/") + path
