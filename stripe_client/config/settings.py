"""Pydantic Settings for the client.

All environment variables use the STRIPE_ prefix.
Example: STRIPE_API_KEY=sk_test_..., STRIPE_MAX_ATTEMPTS=5
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings

from stripe_client.config.context import DEFAULT_ENDPOINT, ApiContext
from stripe_client.logging_config import configure_logging
from stripe_client.resilience.retry import RetryPolicy


class StripeSettings(BaseSettings):
    """Client configuration validated from environment variables."""

    # Credential / endpoint
    api_key: SecretStr
    endpoint: str = DEFAULT_ENDPOINT
    api_version: str | None = None

    # Transport
    timeout_seconds: float = Field(default=30.0, gt=0)

    # Retries
    max_attempts: int = Field(default=3, ge=2)
    retry_backoff_seconds: float = Field(default=0.5, gt=0)
    retry_backoff_factor: float = Field(default=2.0, ge=1)
    retry_max_backoff_seconds: float = Field(default=30.0, gt=0)

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "STRIPE_"}

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_attempts,
            backoff_seconds=self.retry_backoff_seconds,
            backoff_factor=self.retry_backoff_factor,
            max_backoff_seconds=self.retry_max_backoff_seconds,
        )

    def to_context(self) -> ApiContext:
        return ApiContext(
            api_key=self.api_key.get_secret_value(),
            endpoint=self.endpoint,
            api_version=self.api_version,
            timeout_seconds=self.timeout_seconds,
            retry=self.retry_policy(),
        )

    def configure_logging(self) -> None:
        """Install JSON logging on the ``stripe_client`` logger at ``log_level``."""
        configure_logging(self.log_level)
