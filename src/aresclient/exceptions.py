r"""Error taxonomy for the API client.

Every failure surfaced to callers is an ``ApiError`` carrying a
``kind`` that tells whether the request timed out, never reached the
server, or was answered with a 4xx or 5xx status.
"""

from __future__ import annotations

__all__ = ["ApiError", "ApiErrorKind", "TokenRefreshError"]

from enum import Enum
from typing import Any


class ApiErrorKind(str, Enum):
    """Kinds of API failures.

    Attributes:
        TIMEOUT: The deadline elapsed before a response was received.
        NETWORK: The request failed at the transport level (DNS,
            connection reset, etc.).
        CLIENT: The server answered with a 4xx status.
        SERVER: The server answered with a 5xx status.
    """

    TIMEOUT = "timeout"
    NETWORK = "network"
    CLIENT = "client"
    SERVER = "server"


class ApiError(Exception):
    r"""Exception raised when an API request fails.

    Args:
        kind: The kind of failure.
        message: A human readable description of the failure.
        status: The HTTP status code. Only set for ``client`` and
            ``server`` errors.
        details: Optional structured payload returned by the server,
            for example validation errors per field.
        method: The HTTP method of the failed request, if known.
        url: The URL of the failed request, if known.

    Example:
        ```pycon
        >>> from aresclient.exceptions import ApiError
        >>> error = ApiError.from_status(422, "Validation failed", {"field": "email"})
        >>> error.kind
        <ApiErrorKind.CLIENT: 'client'>
        >>> error.status
        422
        >>> error.details
        {'field': 'email'}
        >>> ApiError.timeout().message
        'Request timeout'

        ```
    """

    def __init__(
        self,
        kind: ApiErrorKind,
        message: str,
        *,
        status: int | None = None,
        details: Any = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status = status
        self.details = details
        self.method = method
        self.url = url

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(kind={self.kind.value!r}, "
            f"status={self.status!r}, message={self.message!r})"
        )

    @property
    def is_unauthorized(self) -> bool:
        """Indicate whether the error is an HTTP 401 response."""
        return self.kind is ApiErrorKind.CLIENT and self.status == 401

    @classmethod
    def from_status(
        cls,
        status: int,
        message: str,
        details: Any = None,
        *,
        method: str | None = None,
        url: str | None = None,
    ) -> ApiError:
        """Create an error from an HTTP error status.

        Args:
            status: The HTTP status code. Must be >= 400.
            message: The error message.
            details: Optional structured payload.
            method: The HTTP method of the failed request.
            url: The URL of the failed request.

        Returns:
            A ``client`` error for 4xx statuses and a ``server`` error
            otherwise.

        Raises:
            ValueError: If the status does not denote an error.
        """
        if status < 400:
            msg = f"status must be >= 400 to build an ApiError, got {status}"
            raise ValueError(msg)
        kind = ApiErrorKind.CLIENT if status < 500 else ApiErrorKind.SERVER
        return cls(kind, message, status=status, details=details, method=method, url=url)

    @classmethod
    def timeout(
        cls,
        message: str = "Request timeout",
        *,
        method: str | None = None,
        url: str | None = None,
    ) -> ApiError:
        """Create a ``timeout`` error."""
        return cls(ApiErrorKind.TIMEOUT, message, method=method, url=url)

    @classmethod
    def network(
        cls,
        message: str = "Network error",
        details: Any = None,
        *,
        method: str | None = None,
        url: str | None = None,
    ) -> ApiError:
        """Create a ``network`` error."""
        return cls(ApiErrorKind.NETWORK, message, details=details, method=method, url=url)


class TokenRefreshError(RuntimeError):
    """Exception raised when the refresh endpoint returns an unusable
    token payload."""
