"""Timestamp filters for list requests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from stripe_client.models.codec import to_unix


@dataclass(frozen=True)
class ListFilter:
    """Timestamp filter: either an exact value or a set of bounds."""

    eq: datetime | None = None
    gt: datetime | None = None
    gte: datetime | None = None
    lt: datetime | None = None
    lte: datetime | None = None

    def __post_init__(self) -> None:
        has_bounds = any(b is not None for b in (self.gt, self.gte, self.lt, self.lte))
        if self.eq is not None and has_bounds:
            raise ValueError("ListFilter takes either eq or range bounds, not both")

    def params(self, key: str) -> list[tuple[str, str]]:
        """Render as ``key=t`` or ``key[op]=t`` pairs (unix seconds)."""
        if self.eq is not None:
            return [(key, str(to_unix(self.eq)))]
        bounds = (("gt", self.gt), ("gte", self.gte), ("lt", self.lt), ("lte", self.lte))
        return [(f"{key}[{op}]", str(to_unix(value))) for op, value in bounds if value is not None]
