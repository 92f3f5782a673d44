"""Shared test fixtures for the client test suite."""

from __future__ import annotations

import os
from typing import Callable

import httpx
import pytest

from stripe_client.config import ApiContext
from stripe_client.resilience.retry import RetryPolicy

TEST_API_KEY = "sk_test_4eC39HqLyjWDarjtT1zdp7dc"
TEST_ENDPOINT = "https://api.stripe.test"


# ---------------------------------------------------------------------------
# Ensure required env vars are set for StripeSettings in tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set minimal env vars so StripeSettings can be instantiated in tests."""
    if "STRIPE_API_KEY" not in os.environ:
        monkeypatch.setenv("STRIPE_API_KEY", TEST_API_KEY)


# ---------------------------------------------------------------------------
# Context fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def api_key() -> str:
    return TEST_API_KEY


@pytest.fixture
def retry_policy() -> RetryPolicy:
    return RetryPolicy(max_attempts=3, backoff_seconds=0.01, backoff_factor=2.0)


@pytest.fixture
def context(retry_policy: RetryPolicy) -> ApiContext:
    """Context without a shared client; tests patch ``httpx.AsyncClient``."""
    return ApiContext(api_key=TEST_API_KEY, endpoint=TEST_ENDPOINT, retry=retry_policy)


@pytest.fixture
def mock_context(
    retry_policy: RetryPolicy,
) -> Callable[[Callable[[httpx.Request], httpx.Response]], ApiContext]:
    """Factory for contexts whose shared client routes requests to a handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> ApiContext:
        return ApiContext(
            api_key=TEST_API_KEY,
            endpoint=TEST_ENDPOINT,
            retry=retry_policy,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

    return factory


# ---------------------------------------------------------------------------
# Wire payload fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def plan_payload() -> dict:
    """A plan as the remote returns it."""
    return {
        "id": "gold",
        "object": "plan",
        "amount": 2000,
        "created": 1386247539,
        "currency": "usd",
        "interval": "month",
        "interval_count": 1,
        "livemode": False,
        "metadata": {},
        "name": "Gold Special",
        "statement_descriptor": None,
        "trial_period_days": None,
    }


@pytest.fixture
def plan_list_payload(plan_payload: dict) -> dict:
    silver = {**plan_payload, "id": "silver", "name": "Silver", "amount": 1000}
    return {
        "object": "list",
        "url": "/v1/plans",
        "has_more": True,
        "data": [plan_payload, silver],
    }


# ---------------------------------------------------------------------------
# Scripted attempts for the retry handler
# ---------------------------------------------------------------------------

class ScriptedAttempt:
    """Async callable returning scripted outcomes in order.

    Errors are returned, not raised, the way the executor reports them. The
    last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes: object) -> None:
        self._outcomes = outcomes
        self.calls: list[tuple] = []

    async def __call__(self, *args: object) -> object:
        self.calls.append(args)
        return self._outcomes[min(len(self.calls), len(self._outcomes)) - 1]


@pytest.fixture
def scripted() -> type[ScriptedAttempt]:
    return ScriptedAttempt
