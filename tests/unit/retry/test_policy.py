r"""Unit tests for the retry policy."""

from __future__ import annotations

import httpx
import pytest

from aresclient.backoff import ConstantBackoff, ExponentialBackoff
from aresclient.exceptions import ApiError
from aresclient.retry import RetryDecision, RetryPolicy

NETWORK_ERROR = ApiError.network()
TIMEOUT_ERROR = ApiError.timeout()
TOO_MANY_REQUESTS = ApiError.from_status(429, "Too Many Requests")


def test_retry_policy_defaults() -> None:
    policy = RetryPolicy()
    assert isinstance(policy.backoff_strategy, ExponentialBackoff)
    assert policy.max_wait_time is None
    assert policy.retry_on_timeout is False


###########################################
#     Tests for attempt exhaustion        #
###########################################


@pytest.mark.parametrize(
    "error", [NETWORK_ERROR, TOO_MANY_REQUESTS, ApiError.from_status(503, "Unavailable")]
)
@pytest.mark.parametrize(("attempt", "max_retries"), [(3, 3), (4, 3), (0, 0)])
def test_should_retry_never_once_exhausted(error: ApiError, attempt: int, max_retries: int) -> None:
    decision = RetryPolicy().should_retry(error, attempt, max_retries)
    assert decision == RetryDecision(retry=False, reason="max retries exhausted")


################################
#     Tests for network        #
################################


def test_should_retry_network_error_with_backoff() -> None:
    policy = RetryPolicy()
    delays = [policy.should_retry(NETWORK_ERROR, attempt, 5).delay for attempt in range(3)]
    assert delays == [1.0, 2.0, 4.0]
    assert policy.should_retry(NETWORK_ERROR, 0, 5).retry is True


def test_should_retry_network_error_max_wait_time() -> None:
    policy = RetryPolicy(max_wait_time=1.5)
    assert policy.should_retry(NETWORK_ERROR, 4, 10).delay == 1.5


################################
#     Tests for server         #
################################


@pytest.mark.parametrize("status", [500, 502, 503, 504])
def test_should_retry_server_error(status: int) -> None:
    policy = RetryPolicy(backoff_strategy=ConstantBackoff(delay=0.25))
    decision = policy.should_retry(ApiError.from_status(status, "boom"), 1, 3)
    assert decision.retry is True
    assert decision.delay == 0.25
    assert str(status) in decision.reason


################################
#     Tests for client         #
################################


@pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 422])
def test_should_retry_client_error_never(status: int) -> None:
    decision = RetryPolicy().should_retry(ApiError.from_status(status, "no"), 0, 3)
    assert decision.retry is False
    assert str(status) in decision.reason


def test_should_retry_429_honors_retry_after() -> None:
    decision = RetryPolicy().should_retry(
        TOO_MANY_REQUESTS, 0, 3, httpx.Headers({"Retry-After": "5"})
    )
    assert decision.retry is True
    assert decision.delay == 5.0


def test_should_retry_429_retry_after_lowercase_dict() -> None:
    decision = RetryPolicy().should_retry(TOO_MANY_REQUESTS, 0, 3, {"retry-after": "0.5"})
    assert decision.delay == 0.5


def test_should_retry_429_retry_after_not_capped() -> None:
    policy = RetryPolicy(max_wait_time=1.0)
    decision = policy.should_retry(TOO_MANY_REQUESTS, 0, 3, {"Retry-After": "4"})
    assert decision.delay == 4.0


@pytest.mark.parametrize("headers", [None, {}, {"Retry-After": "later"}])
def test_should_retry_429_without_retry_after_uses_backoff(
    headers: dict[str, str] | None,
) -> None:
    decision = RetryPolicy().should_retry(TOO_MANY_REQUESTS, 1, 3, headers)
    assert decision.retry is True
    assert decision.delay == 2.0


################################
#     Tests for timeout        #
################################


def test_should_retry_timeout_disabled_by_default() -> None:
    decision = RetryPolicy().should_retry(TIMEOUT_ERROR, 0, 3)
    assert decision == RetryDecision(retry=False, reason="timeout")


def test_should_retry_timeout_enabled() -> None:
    decision = RetryPolicy(retry_on_timeout=True).should_retry(TIMEOUT_ERROR, 0, 3)
    assert decision.retry is True
    assert decision.delay == 1.0


def test_should_retry_timeout_enabled_still_bounded() -> None:
    decision = RetryPolicy(retry_on_timeout=True).should_retry(TIMEOUT_ERROR, 3, 3)
    assert decision.retry is False
