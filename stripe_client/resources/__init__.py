"""Resource operations."""

from stripe_client.resources import plans

__all__ = ["plans"]
