r"""Request data model shared by the client, the executor and the auth
coordinator."""

from __future__ import annotations

__all__ = ["RequestDescriptor", "RequestOptions"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from aresclient.core.config import ClientConfig


@dataclass(frozen=True)
class RequestOptions:
    """Per-call request options.

    Unset values fall back to the client configuration.

    Attributes:
        timeout: Maximum seconds to wait for one attempt.
        retries: Maximum number of retries after the first attempt.
        headers: Headers overriding the client default headers.
        skip_auth: If ``True``, no bearer token is attached and a 401
            response never triggers a token refresh.
    """

    timeout: float | None = None
    retries: int | None = None
    headers: Mapping[str, str] | None = None
    skip_auth: bool = False


@dataclass(frozen=True)
class RequestDescriptor:
    r"""Immutable description of one logical API request.

    The descriptor is built once per call and reused verbatim for every
    attempt, including the replay after a token refresh.

    Attributes:
        method: The HTTP method in upper case.
        path: The request path, appended to the client base URL.
        body: Optional JSON-serializable request body.
        headers: Per-call header overrides.
        timeout: Maximum seconds to wait for one attempt.
        max_retries: Maximum number of retries after the first attempt.
        skip_auth: Whether the request is sent without credentials.

    Example:
        ```pycon
        >>> from aresclient.core.config import ClientConfig
        >>> from aresclient.models import RequestDescriptor, RequestOptions
        >>> request = RequestDescriptor.build(
        ...     "get", "/users", config=ClientConfig(), options=RequestOptions(retries=1)
        ... )
        >>> request.method, request.max_retries, request.timeout
        ('GET', 1, 10.0)

        ```
    """

    method: str
    path: str
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float = 10.0
    max_retries: int = 3
    skip_auth: bool = False

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        *,
        config: ClientConfig,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> RequestDescriptor:
        """Resolve per-call options against the client configuration.

        Args:
            method: The HTTP method.
            path: The request path.
            config: The client configuration providing defaults.
            body: Optional JSON-serializable body.
            options: Optional per-call options.

        Returns:
            The resolved request descriptor.
        """
        options = options or RequestOptions()
        resolved = config.merge(timeout=options.timeout, max_retries=options.retries)
        return cls(
            method=method.upper(),
            path=path,
            body=body,
            headers=dict(options.headers or {}),
            timeout=resolved.timeout,
            max_retries=resolved.max_retries,
            skip_auth=options.skip_auth,
        )
