"""Public models and codecs."""

from stripe_client.models.codec import (
    ModelCodec,
    WireField,
    decode_metadata,
    from_unix,
    metadata_to_form,
    to_camel_case,
    to_snake_case,
    to_unix,
)
from stripe_client.models.collections import ListCodec, ListEnvelope
from stripe_client.models.filters import ListFilter
from stripe_client.models.plans import (
    DeleteResponse,
    InputViolation,
    Interval,
    NegativeAmount,
    Plan,
    PlanInput,
    PlanList,
    PlanListInput,
    PlanUpdate,
    StatementDescriptorInvalidCharacter,
    StatementDescriptorTooLong,
)

__all__ = [
    "DeleteResponse",
    "InputViolation",
    "Interval",
    "NegativeAmount",
    "ListCodec",
    "ListEnvelope",
    "ListFilter",
    "ModelCodec",
    "Plan",
    "PlanInput",
    "PlanList",
    "PlanListInput",
    "PlanUpdate",
    "StatementDescriptorInvalidCharacter",
    "StatementDescriptorTooLong",
    "WireField",
    "decode_metadata",
    "from_unix",
    "metadata_to_form",
    "to_camel_case",
    "to_snake_case",
    "to_unix",
]
