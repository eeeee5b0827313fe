r"""Transport layer performing exactly one network call per attempt.

The transport never retries and never raises for network conditions:
every call resolves to an ``AttemptOutcome`` that the classifier turns
into a result or an ``ApiError``.
"""

from __future__ import annotations

__all__ = [
    "AttemptOutcome",
    "HttpxTransport",
    "NetworkFailure",
    "PreparedRequest",
    "Success",
    "Timeout",
    "Transport",
]

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Union

import httpx

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedRequest:
    """Fully resolved request ready to be put on the wire.

    Attributes:
        method: The HTTP method.
        url: The absolute URL.
        headers: The final request headers, credentials included.
        content: The serialized body, or ``None``.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | None = None


@dataclass(frozen=True)
class Success:
    """A response was received, whatever its status code."""

    status: int
    body: bytes = b""
    headers: httpx.Headers = field(default_factory=httpx.Headers)


@dataclass(frozen=True)
class NetworkFailure:
    """The call failed before a response was received, including when
    the URL is malformed."""

    error: Exception


@dataclass(frozen=True)
class Timeout:
    """The deadline elapsed before a response was received."""

    timeout: float


AttemptOutcome = Union[Success, NetworkFailure, Timeout]


class Transport(ABC):
    """Abstract base class for transports."""

    @abstractmethod
    async def send(self, request: PreparedRequest, timeout: float) -> AttemptOutcome:
        """Perform one network call.

        Args:
            request: The request to send.
            timeout: The deadline in seconds. The call is abandoned when
                it elapses.

        Returns:
            The outcome of the call.
        """


class HttpxTransport(Transport):
    r"""Transport backed by an ``httpx.AsyncClient``.

    The deadline is enforced with ``asyncio.wait_for`` around the whole
    call, so a server that never answers cannot hold the caller past the
    configured timeout.

    Args:
        client: The httpx client used to send requests. Its lifecycle is
            managed by the caller.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from aresclient.transport import HttpxTransport, PreparedRequest
        >>> async def main():
        ...     mock = httpx.MockTransport(lambda request: httpx.Response(204))
        ...     async with httpx.AsyncClient(transport=mock) as client:
        ...         transport = HttpxTransport(client)
        ...         return await transport.send(
        ...             PreparedRequest(method="GET", url="https://api.example.com/ping"),
        ...             timeout=1.0,
        ...         )
        ...
        >>> asyncio.run(main()).status
        204

        ```
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(self, request: PreparedRequest, timeout: float) -> AttemptOutcome:
        try:
            response = await asyncio.wait_for(
                self._client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    content=request.content,
                    timeout=timeout,
                ),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.debug(f"{request.method} request to {request.url} timed out after {timeout}s")
            return Timeout(timeout=timeout)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.debug(
                f"{request.method} request to {request.url} failed with "
                f"{type(exc).__name__}: {exc}"
            )
            return NetworkFailure(error=exc)
        return Success(
            status=response.status_code, body=response.content, headers=response.headers
        )
