"""Plan resource models and their wire field tables."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from stripe_client.models.codec import (
    ModelCodec,
    WireField,
    boolean,
    decode_metadata,
    encode_metadata,
    enum_member,
    enum_value,
    from_unix,
    integer,
    string,
    to_unix,
)
from stripe_client.models.collections import ListCodec, ListEnvelope
from stripe_client.models.filters import ListFilter

STATEMENT_DESCRIPTOR_MAX_LENGTH = 22
STATEMENT_DESCRIPTOR_FORBIDDEN = ("<", ">", '"', "'")


class Interval(str, Enum):
    """Billing frequency of a plan."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


# ---------------------------------------------------------------------------
# Input violations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatementDescriptorTooLong:
    length: int
    max_length: int = STATEMENT_DESCRIPTOR_MAX_LENGTH


@dataclass(frozen=True)
class StatementDescriptorInvalidCharacter:
    character: str


@dataclass(frozen=True)
class NegativeAmount:
    amount: int


InputViolation = Union[
    NegativeAmount,
    StatementDescriptorTooLong,
    StatementDescriptorInvalidCharacter,
]


def check_statement_descriptor(value: str | None) -> InputViolation | None:
    """Return the first violation in a statement descriptor, or None."""
    if value is None:
        return None
    if len(value) > STATEMENT_DESCRIPTOR_MAX_LENGTH:
        return StatementDescriptorTooLong(len(value))
    for character in STATEMENT_DESCRIPTOR_FORBIDDEN:
        if character in value:
            return StatementDescriptorInvalidCharacter(character)
    return None


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class Plan(BaseModel):
    """A recurring price a customer can subscribe to."""

    model_config = ConfigDict(frozen=True, strict=True)

    id: str
    amount: int  # minor currency units
    created: datetime
    currency: str
    interval: Interval
    interval_count: int
    livemode: bool
    metadata: dict[str, str] | None = None
    name: str
    statement_descriptor: str | None = None
    trial_period_days: int | None = None


class PlanInput(BaseModel):
    """Parameters for creating a plan. Prefer ``PlanInput.build``."""

    model_config = ConfigDict(frozen=True, strict=True)

    id: str
    amount: int = Field(ge=0)
    currency: str
    interval: Interval
    name: str
    interval_count: int | None = None
    metadata: dict[str, str] | None = None
    statement_descriptor: str | None = None
    trial_period_days: int | None = None

    @classmethod
    def build(cls, **values: Any) -> PlanInput | InputViolation:
        """Construct a PlanInput, or return the violation that prevents it."""
        amount = values.get("amount")
        if isinstance(amount, int) and not isinstance(amount, bool) and amount < 0:
            return NegativeAmount(amount)
        violation = check_statement_descriptor(values.get("statement_descriptor"))
        if violation is not None:
            return violation
        return cls(**values)

    def to_form(self) -> dict[str, str]:
        """Form parameters for the create call, metadata excluded."""
        params = {
            "id": self.id,
            "amount": str(self.amount),
            "currency": self.currency.lower(),
            "interval": self.interval.value,
            "name": self.name,
            "interval_count": _optional_str(self.interval_count),
            "statement_descriptor": self.statement_descriptor,
            "trial_period_days": _optional_str(self.trial_period_days),
        }
        return {k: v for k, v in params.items() if v is not None}


class PlanUpdate(BaseModel):
    """Mutable plan fields. Prefer ``PlanUpdate.build``."""

    model_config = ConfigDict(frozen=True, strict=True)

    name: str | None = None
    metadata: dict[str, str] | None = None
    statement_descriptor: str | None = None
    trial_period_days: int | None = None

    @classmethod
    def build(cls, **values: Any) -> PlanUpdate | InputViolation:
        violation = check_statement_descriptor(values.get("statement_descriptor"))
        if violation is not None:
            return violation
        return cls(**values)

    def to_form(self) -> dict[str, str]:
        params = {
            "name": self.name,
            "statement_descriptor": self.statement_descriptor,
            "trial_period_days": _optional_str(self.trial_period_days),
        }
        return {k: v for k, v in params.items() if v is not None}


class PlanListInput(BaseModel):
    """Filters and cursors for listing plans."""

    model_config = ConfigDict(frozen=True)

    created: ListFilter | None = None
    ending_before: str | None = None
    limit: int | None = Field(default=None, ge=1, le=100)
    starting_after: str | None = None


class DeleteResponse(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    id: str
    deleted: bool


PlanList = ListEnvelope[Plan]


def _optional_str(value: int | None) -> str | None:
    return None if value is None else str(value)


# ---------------------------------------------------------------------------
# Codecs
# ---------------------------------------------------------------------------

PLAN_CODEC: ModelCodec[Plan] = ModelCodec(
    Plan,
    [
        WireField("id", "id", string),
        WireField("amount", "amount", integer),
        WireField("created", "created", from_unix, to_unix),
        WireField("currency", "currency", string),
        WireField("interval", "interval", enum_member(Interval), enum_value),
        WireField("interval_count", "interval_count", integer),
        WireField("livemode", "livemode", boolean),
        WireField(
            "metadata",
            "metadata",
            decode_metadata,
            encode_metadata,
            required=False,
            omit_when_none=True,
        ),
        WireField("name", "name", string),
        WireField("statement_descriptor", "statement_descriptor", string, required=False),
        WireField("trial_period_days", "trial_period_days", integer, required=False),
    ],
    object_name="plan",
)

PLAN_INPUT_CODEC: ModelCodec[PlanInput] = ModelCodec(
    PlanInput,
    [
        WireField("id", "id", string),
        WireField("amount", "amount", integer),
        WireField("currency", "currency", string),
        WireField("interval", "interval", enum_member(Interval), enum_value),
        WireField("name", "name", string),
        WireField("interval_count", "interval_count", integer, required=False),
        WireField(
            "metadata",
            "metadata",
            decode_metadata,
            encode_metadata,
            required=False,
            omit_when_none=True,
        ),
        WireField("statement_descriptor", "statement_descriptor", string, required=False),
        WireField("trial_period_days", "trial_period_days", integer, required=False),
    ],
)

PLAN_LIST_CODEC: ListCodec[Plan] = ListCodec(PLAN_CODEC)

DELETE_RESPONSE_CODEC: ModelCodec[DeleteResponse] = ModelCodec(
    DeleteResponse,
    [
        WireField("id", "id", string),
        WireField("deleted", "deleted", boolean),
    ],
)
