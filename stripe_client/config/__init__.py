"""Configuration module: settings and call context."""

from stripe_client.config.context import DEFAULT_ENDPOINT, ApiContext
from stripe_client.config.settings import StripeSettings

__all__ = [
    "DEFAULT_ENDPOINT",
    "ApiContext",
    "StripeSettings",
]
