r"""Unit tests for callback functionality."""

from __future__ import annotations

from unittest.mock import Mock, patch

from aresclient.callbacks import (
    FailureInfo,
    RequestInfo,
    ResponseInfo,
    RetryInfo,
    invoke_on_failure,
    invoke_on_request,
    invoke_on_retry,
    invoke_on_success,
)
from aresclient.exceptions import ApiError

TEST_URL = "https://api.example.com/data"


def test_invoke_on_request() -> None:
    callback = Mock()
    invoke_on_request(
        callback, url=TEST_URL, method="GET", attempt=0, max_retries=3, replay=False
    )
    callback.assert_called_once_with(
        RequestInfo(url=TEST_URL, method="GET", attempt=1, max_retries=3, replay=False)
    )


def test_invoke_on_request_none() -> None:
    invoke_on_request(None, url=TEST_URL, method="GET", attempt=0, max_retries=3, replay=True)


def test_invoke_on_retry() -> None:
    callback = Mock()
    error = ApiError.network()
    invoke_on_retry(
        callback,
        url=TEST_URL,
        method="POST",
        attempt=0,
        max_retries=3,
        wait_time=1.5,
        error=error,
    )
    callback.assert_called_once_with(
        RetryInfo(
            url=TEST_URL, method="POST", attempt=2, max_retries=3, wait_time=1.5, error=error
        )
    )


def test_invoke_on_success() -> None:
    callback = Mock()
    with patch("aresclient.callbacks.time.monotonic", return_value=12.0):
        invoke_on_success(
            callback, url=TEST_URL, method="GET", attempt=1, status_code=200, start_time=10.0
        )
    callback.assert_called_once_with(
        ResponseInfo(url=TEST_URL, method="GET", attempt=2, status_code=200, total_time=2.0)
    )


def test_invoke_on_failure() -> None:
    callback = Mock()
    error = ApiError.from_status(404, "Not found")
    with patch("aresclient.callbacks.time.monotonic", return_value=5.5):
        invoke_on_failure(
            callback, url=TEST_URL, method="GET", attempt=0, error=error, start_time=5.0
        )
    callback.assert_called_once_with(
        FailureInfo(url=TEST_URL, method="GET", attempt=1, error=error, total_time=0.5)
    )


def test_invoke_callbacks_none() -> None:
    invoke_on_success(None, url=TEST_URL, method="GET", attempt=0, status_code=200, start_time=0)
    invoke_on_failure(
        None, url=TEST_URL, method="GET", attempt=0, error=ApiError.timeout(), start_time=0
    )
