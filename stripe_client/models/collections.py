"""Cursor-paginated list envelope.

Wire shape: ``{object: "list", url, has_more, data: [...], total_count?}``.
Traversal is left to the caller: take ``next_cursor()`` and pass it as
``starting_after`` on the next list request.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from stripe_client.errors import DecodeError
from stripe_client.models.codec import ModelCodec, boolean, integer, string

T = TypeVar("T", bound=BaseModel)


class ListEnvelope(BaseModel, Generic[T]):
    """One page of a paginated collection."""

    model_config = ConfigDict(frozen=True, strict=True)

    url: str
    has_more: bool
    data: list[T]
    total_count: int | None = None

    def next_cursor(self) -> str | None:
        """Id of the last item when another page follows, else None."""
        if not self.has_more or not self.data:
            return None
        return getattr(self.data[-1], "id", None)

    def previous_cursor(self) -> str | None:
        """Id of the first item, usable as ``ending_before``."""
        if not self.data:
            return None
        return getattr(self.data[0], "id", None)


class ListCodec(Generic[T]):
    """Decodes/encodes list envelopes whose items use ``item_codec``."""

    def __init__(self, item_codec: ModelCodec[T]) -> None:
        self.item_codec = item_codec

    def decode(self, payload: Any) -> ListEnvelope[T]:
        if not isinstance(payload, dict):
            raise DecodeError("expected list object")
        if payload.get("object") != "list":
            raise DecodeError(f"expected 'list', got {payload.get('object')!r}", field="object")

        try:
            url = string(payload.get("url"))
            has_more = boolean(payload.get("has_more"))
            raw_total = payload.get("total_count")
            total_count = None if raw_total is None else integer(raw_total)
        except TypeError as exc:
            raise DecodeError(str(exc)) from exc

        raw_data = payload.get("data")
        if not isinstance(raw_data, list):
            raise DecodeError("expected array", field="data")
        items = []
        for index, raw_item in enumerate(raw_data):
            try:
                items.append(self.item_codec.decode(raw_item))
            except DecodeError as exc:
                raise DecodeError(str(exc), field=f"data[{index}]") from exc

        model = ListEnvelope[self.item_codec.model]  # type: ignore[name-defined]
        return model(url=url, has_more=has_more, data=items, total_count=total_count)

    def encode(self, envelope: ListEnvelope[T]) -> dict[str, Any]:
        wire: dict[str, Any] = {
            "object": "list",
            "url": envelope.url,
            "has_more": envelope.has_more,
            "data": [self.item_codec.encode(item) for item in envelope.data],
        }
        if envelope.total_count is not None:
            wire["total_count"] = envelope.total_count
        return wire
