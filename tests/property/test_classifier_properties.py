"""Property tests for error classification.

# Feature: error classifier, Property 8: Unknown error types are forward compatible
"""

from __future__ import annotations

from hypothesis import assume, given, settings, strategies as st

from stripe_client.classifier import classify
from stripe_client.errors import ApiError, CardError, StripeError

KNOWN_TYPES = {
    "invalid_request_error",
    "api_connection_error",
    "card_error",
    "api_error",
    "rate_limit_error",
    "authentication_error",
    "idempotency_error",
}

statuses = st.integers(min_value=400, max_value=599)
json_scalars = st.none() | st.booleans() | st.integers() | st.text(max_size=20)


@settings(max_examples=100)
@given(status=statuses, error_type=st.text(max_size=30), message=st.none() | st.text(max_size=50))
def test_unknown_type_yields_api_error(status: int, error_type: str, message: str | None) -> None:
    """Property 8: unrecognized discriminators classify as ApiError."""
    assume(error_type not in KNOWN_TYPES)
    body = {"error": {"type": error_type, "message": message}}

    error = classify(status, body)

    assert type(error) is ApiError
    assert error.status_code == status
    if message:
        assert error.message == message


@settings(max_examples=100)
@given(
    status=statuses,
    body=st.recursive(
        json_scalars,
        lambda children: st.lists(children, max_size=3)
        | st.dictionaries(st.text(max_size=8), children, max_size=3),
        max_leaves=10,
    ),
)
def test_classify_never_fails(status: int, body: object) -> None:
    """Any JSON body classifies to some StripeError without raising."""
    assert isinstance(classify(status, body), StripeError)


@settings(max_examples=100)
@given(param=st.from_regex(r"[a-z]+(_[a-z]+)*", fullmatch=True))
def test_card_param_kept_in_wire_form(param: str) -> None:
    error = classify(402, {"error": {"type": "card_error", "param": param}})
    assert isinstance(error, CardError)
    assert error.param == param
