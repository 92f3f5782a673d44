"""Unit tests for error classification and retry disposition."""

from __future__ import annotations

import pytest

from stripe_client.classifier import classify
from stripe_client.errors import (
    ApiConnectionError,
    ApiError,
    AuthenticationError,
    CardError,
    IdempotencyError,
    InvalidRequestError,
    MaxNumberOfRetriesError,
    RateLimitError,
    StripeError,
    is_retryable,
    unwrap,
)


class TestClassify:
    @pytest.mark.parametrize(
        "error_type, expected",
        [
            ("invalid_request_error", InvalidRequestError),
            ("api_connection_error", ApiConnectionError),
            ("card_error", CardError),
            ("api_error", ApiError),
            ("rate_limit_error", RateLimitError),
            ("authentication_error", AuthenticationError),
            ("idempotency_error", IdempotencyError),
        ],
    )
    def test_maps_known_types(self, error_type: str, expected: type[StripeError]) -> None:
        error = classify(400, {"error": {"type": error_type}})
        assert type(error) is expected
        assert error.status_code == 400

    def test_unknown_type_is_api_error(self) -> None:
        error = classify(400, {"error": {"type": "quantum_flux_error", "message": "boom"}})
        assert type(error) is ApiError
        assert error.message == "boom"

    def test_non_string_type_is_api_error(self) -> None:
        assert type(classify(400, {"error": {"type": 7}})) is ApiError

    def test_card_error_carries_param_in_wire_form(self) -> None:
        body = {
            "error": {
                "type": "card_error",
                "message": "Your card's expiration year is invalid.",
                "param": "exp_year",
                "code": "invalid_expiry_year",
            }
        }
        error = classify(402, body)

        assert isinstance(error, CardError)
        assert error.message == "Your card's expiration year is invalid."
        assert error.param == "exp_year"
        assert error.code == "invalid_expiry_year"
        assert error.decline_code is None
        assert error.body == body

    def test_card_error_without_message_uses_default(self) -> None:
        error = classify(402, {"error": {"type": "card_error"}})
        assert error.message == CardError.message
        assert error.param is None

    @pytest.mark.parametrize(
        "status, expected",
        [
            (400, InvalidRequestError),
            (401, AuthenticationError),
            (402, CardError),
            (404, InvalidRequestError),
            (429, RateLimitError),
            (500, ApiError),
            (503, ApiError),
            (418, ApiError),
        ],
    )
    def test_falls_back_to_status_without_error_object(
        self, status: int, expected: type[StripeError]
    ) -> None:
        assert type(classify(status, None)) is expected
        assert type(classify(status, {"message": "no error key"})) is expected
        assert type(classify(status, ["not", "an", "object"])) is expected

    def test_pattern_matching_on_variant(self) -> None:
        error = classify(402, {"error": {"type": "card_error", "param": "cvc"}})
        match error:
            case CardError(param="cvc"):
                matched = True
            case _:
                matched = False
        assert matched


class TestRetryDisposition:
    @pytest.mark.parametrize("error_cls", [ApiConnectionError, ApiError, RateLimitError])
    def test_transient_errors_are_retryable(self, error_cls: type[StripeError]) -> None:
        assert is_retryable(error_cls())

    @pytest.mark.parametrize(
        "error",
        [
            InvalidRequestError(),
            AuthenticationError(),
            CardError(),
            IdempotencyError(),
            MaxNumberOfRetriesError(3, ApiError()),
        ],
    )
    def test_terminal_errors_are_not_retryable(self, error: StripeError) -> None:
        assert not is_retryable(error)

    def test_new_variants_default_to_terminal(self) -> None:
        class PermissionDeniedError(StripeError):
            pass

        assert not is_retryable(PermissionDeniedError())


class TestUnwrap:
    def test_returns_value(self) -> None:
        assert unwrap("plan") == "plan"

    def test_raises_error(self) -> None:
        with pytest.raises(CardError):
            unwrap(CardError("declined"))
