r"""Unit tests for the outcome classifier."""

from __future__ import annotations

import httpx
import pytest

from aresclient.classifier import (
    classify_outcome,
    decode_body,
    parse_json_body,
    unwrap_envelope,
)
from aresclient.exceptions import ApiErrorKind
from aresclient.transport import NetworkFailure, Success, Timeout

######################################
#     Tests for classify_outcome     #
######################################


def test_classify_outcome_timeout() -> None:
    error = classify_outcome(Timeout(timeout=0.1), method="GET", url="https://x/y")
    assert error is not None
    assert error.kind is ApiErrorKind.TIMEOUT
    assert error.status is None
    assert "timeout" in error.message
    assert error.method == "GET"
    assert error.url == "https://x/y"


def test_classify_outcome_network_failure() -> None:
    error = classify_outcome(NetworkFailure(error=httpx.ConnectError("connection reset")))
    assert error is not None
    assert error.kind is ApiErrorKind.NETWORK
    assert error.status is None
    assert "connection reset" in error.message
    assert error.details == "ConnectError"


@pytest.mark.parametrize("status", [200, 201, 204, 299, 304])
def test_classify_outcome_success(status: int) -> None:
    assert classify_outcome(Success(status=status)) is None


def test_classify_outcome_client_error_with_message_and_details() -> None:
    error = classify_outcome(
        Success(
            status=422,
            body=b'{"message": "Validation failed", "details": {"field": "email"}}',
        )
    )
    assert error is not None
    assert error.kind is ApiErrorKind.CLIENT
    assert error.status == 422
    assert error.message == "Validation failed"
    assert error.details == {"field": "email"}


def test_classify_outcome_unauthorized_is_client_error() -> None:
    error = classify_outcome(Success(status=401, body=b'{"message": "Unauthorized"}'))
    assert error is not None
    assert error.is_unauthorized


@pytest.mark.parametrize("body", [b"", b"not json", b"[1, 2]", b'{"message": 42}', b"null"])
def test_classify_outcome_client_error_generic_message(body: bytes) -> None:
    """Test that unparseable bodies fall back to a generic message."""
    error = classify_outcome(Success(status=400, body=body))
    assert error is not None
    assert error.kind is ApiErrorKind.CLIENT
    assert error.message == "Request failed with status 400"
    assert error.details is None


def test_classify_outcome_server_error() -> None:
    error = classify_outcome(Success(status=500, body=b'{"message": "Internal server error"}'))
    assert error is not None
    assert error.kind is ApiErrorKind.SERVER
    assert error.status == 500
    assert error.message == "Internal server error"


def test_classify_outcome_server_error_html_body() -> None:
    error = classify_outcome(Success(status=502, body=b"<html>Bad Gateway</html>"))
    assert error is not None
    assert error.kind is ApiErrorKind.SERVER
    assert error.message == "Server error (status 502)"


#####################################
#     Tests for parse_json_body     #
#####################################


def test_parse_json_body() -> None:
    assert parse_json_body(b'{"a": 1}') == {"a": 1}
    assert parse_json_body(b"") is None
    assert parse_json_body(b"{") is None


#####################################
#     Tests for unwrap_envelope     #
#####################################


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"data": "success"}, "success"),
        ({"success": True, "data": [1, 2], "message": "ok"}, [1, 2]),
        ({"data": [1], "pagination": {"page": 1}}, {"data": [1], "pagination": {"page": 1}}),
        ({"success": True}, {"success": True}),
        ([1, 2], [1, 2]),
        ("text", "text"),
    ],
)
def test_unwrap_envelope(payload: object, expected: object) -> None:
    assert unwrap_envelope(payload) == expected


#################################
#     Tests for decode_body     #
#################################


def test_decode_body_json_envelope() -> None:
    outcome = Success(
        status=200,
        body=b'{"data": "success"}',
        headers=httpx.Headers({"Content-Type": "application/json"}),
    )
    assert decode_body(outcome) == "success"


def test_decode_body_json_without_content_type() -> None:
    assert decode_body(Success(status=200, body=b'{"id": 1}')) == {"id": 1}


def test_decode_body_text() -> None:
    outcome = Success(
        status=200, body=b"pong", headers=httpx.Headers({"Content-Type": "text/plain"})
    )
    assert decode_body(outcome) == "pong"


def test_decode_body_invalid_json_returns_text() -> None:
    outcome = Success(
        status=200, body=b"{oops", headers=httpx.Headers({"Content-Type": "application/json"})
    )
    assert decode_body(outcome) == "{oops"


def test_decode_body_empty() -> None:
    assert decode_body(Success(status=204)) is None


@pytest.mark.parametrize(
    ("body", "expected"), [(b"null", None), (b"0", 0), (b"false", False), (b"[]", [])]
)
def test_decode_body_json_falsy_values(body: bytes, expected: object) -> None:
    outcome = Success(
        status=200, body=body, headers=httpx.Headers({"Content-Type": "application/json"})
    )
    assert decode_body(outcome) == expected
    assert type(decode_body(outcome)) is type(expected)
