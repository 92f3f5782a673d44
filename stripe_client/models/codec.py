"""Wire JSON <-> typed value conversion.

Each typed value declares an explicit table of ``WireField`` entries (wire
name, attribute name, converters). ``ModelCodec`` walks that table in both
directions. Handles:
- snake_case <-> camelCase name conversion (used for error parameter names)
- unix-second timestamps <-> timezone-aware datetimes, exactly
- "empty map <-> absent metadata" normalization
- strict type checks so malformed payloads raise ``DecodeError`` instead of
  being coerced
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from stripe_client.errors import DecodeError

M = TypeVar("M", bound=BaseModel)
E = TypeVar("E", bound=Enum)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)

_SNAKE_WORD_RE = re.compile(r"_([a-z0-9])")
_CAMEL_UPPER_RE = re.compile(r"([A-Z])")


# ---------------------------------------------------------------------------
# Field names
# ---------------------------------------------------------------------------


def to_camel_case(name: str) -> str:
    """``trial_period_days`` -> ``trialPeriodDays``."""
    return _SNAKE_WORD_RE.sub(lambda m: m.group(1).upper(), name)


def to_snake_case(name: str) -> str:
    """``trialPeriodDays`` -> ``trial_period_days``."""
    return _CAMEL_UPPER_RE.sub(lambda m: "_" + m.group(1).lower(), name)


# ---------------------------------------------------------------------------
# Scalar converters
# ---------------------------------------------------------------------------


def _type_name(value: Any) -> str:
    return "null" if value is None else type(value).__name__


def identity(value: Any) -> Any:
    return value


def string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {_type_name(value)}")
    return value


def integer(value: Any) -> int:
    # bool is an int subclass but never a valid wire integer
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected integer, got {_type_name(value)}")
    return value


def boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected boolean, got {_type_name(value)}")
    return value


def from_unix(value: Any) -> datetime:
    """Decode integer unix seconds into a UTC datetime."""
    seconds = integer(value)
    return EPOCH + timedelta(seconds=seconds)


def to_unix(value: datetime) -> int:
    """Encode an aware datetime as integer unix seconds (floored)."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("naive datetimes cannot be encoded as unix timestamps")
    return (value - EPOCH) // _ONE_SECOND


def enum_member(enum_cls: type[E]) -> Callable[[Any], E]:
    """Case-insensitive decoder for string-valued enums."""

    def decode(value: Any) -> E:
        raw = string(value).lower()
        for member in enum_cls:
            if member.value == raw:
                return member
        raise ValueError(f"unknown {enum_cls.__name__} value {value!r}")

    return decode


def enum_value(member: Enum) -> Any:
    return member.value


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def decode_metadata(value: Any) -> dict[str, str] | None:
    """Missing, null and ``{}`` all decode to ``None``."""
    if value is None:
        return None
    if not isinstance(value, dict):
        raise TypeError(f"expected object, got {_type_name(value)}")
    for key, item in value.items():
        if not isinstance(item, str):
            raise TypeError(f"metadata[{key}]: expected string, got {_type_name(item)}")
    return dict(value) if value else None


def encode_metadata(value: dict[str, str]) -> dict[str, str]:
    return dict(value)


def metadata_to_form(metadata: dict[str, str] | None, key: str = "metadata") -> dict[str, str]:
    """Render metadata as form params.

    ``None`` sends nothing, ``{}`` sends ``metadata=""`` (the remote unsets
    metadata on an empty value), entries become ``metadata[k]=v``.
    """
    if metadata is None:
        return {}
    if not metadata:
        return {key: ""}
    return {f"{key}[{name}]": value for name, value in metadata.items()}


# ---------------------------------------------------------------------------
# Field tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WireField:
    """One entry of a codec's field table."""

    attr: str
    wire: str
    decode: Callable[[Any], Any] = identity
    encode: Callable[[Any], Any] = identity
    required: bool = True
    omit_when_none: bool = False


class ModelCodec(Generic[M]):
    """Table-driven encoder/decoder for one pydantic model.

    Parameters
    ----------
    model:
        Target model class (should be ``strict`` and ``frozen``).
    fields:
        The full field table. Wire names not listed are ignored on decode.
    object_name:
        Expected value of the wire ``object`` discriminator, if any.
    """

    def __init__(
        self,
        model: type[M],
        fields: list[WireField],
        object_name: str | None = None,
    ) -> None:
        self.model = model
        self.fields = tuple(fields)
        self.object_name = object_name
        self._by_attr = {f.attr: f for f in self.fields}
        self._by_wire = {f.wire: f for f in self.fields}
        if len(self._by_attr) != len(self.fields) or len(self._by_wire) != len(self.fields):
            raise ValueError(f"duplicate field names in codec for {model.__name__}")

    def wire_name(self, attr: str) -> str:
        return self._by_attr[attr].wire

    def attr_name(self, wire: str) -> str:
        return self._by_wire[wire].attr

    def decode(self, payload: Any) -> M:
        if not isinstance(payload, dict):
            raise DecodeError(
                f"expected {self.model.__name__} object, got {_type_name(payload)}"
            )
        if self.object_name is not None and "object" in payload:
            if payload["object"] != self.object_name:
                raise DecodeError(
                    f"expected {self.object_name!r}, got {payload['object']!r}",
                    field="object",
                )

        values: dict[str, Any] = {}
        for f in self.fields:
            raw = payload.get(f.wire)
            if raw is None and f.required:
                raise DecodeError("required field is missing or null", field=f.wire)
            if raw is None:
                values[f.attr] = None
                continue
            try:
                values[f.attr] = f.decode(raw)
            except (TypeError, ValueError, OverflowError) as exc:
                raise DecodeError(str(exc), field=f.wire) from exc

        try:
            return self.model(**values)
        except ValidationError as exc:
            raise DecodeError(str(exc)) from exc

    def encode(self, value: M) -> dict[str, Any]:
        wire: dict[str, Any] = {}
        if self.object_name is not None:
            wire["object"] = self.object_name
        for f in self.fields:
            attr_value = getattr(value, f.attr)
            if attr_value is None:
                if not f.omit_when_none:
                    wire[f.wire] = None
                continue
            wire[f.wire] = f.encode(attr_value)
        return wire
