r"""Shared helpers to fake the backend in tests."""

from __future__ import annotations

__all__ = [
    "BASE_URL",
    "RecordingHandler",
    "hang_forever",
    "json_response",
    "make_client",
    "request_json",
]

import asyncio
import json
from typing import TYPE_CHECKING, Any

import httpx

from aresclient import ApiClient
from aresclient.backoff import ConstantBackoff
from aresclient.core import ClientConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aresclient.auth import AuthBridge

BASE_URL = "https://api.example.com/v1"


def json_response(status_code: int, payload: Any = None, **kwargs: Any) -> httpx.Response:
    """Create an httpx.Response with a JSON body."""
    if payload is None:
        return httpx.Response(status_code, **kwargs)
    return httpx.Response(status_code, json=payload, **kwargs)


class RecordingHandler:
    """MockTransport handler replaying scripted responses.

    Each item of ``responses`` is either an ``httpx.Response``, an
    exception instance raised from the handler, or a coroutine function
    receiving the request. Every request is recorded in ``requests``.
    """

    def __init__(
        self,
        responses: list[
            httpx.Response | Exception | Callable[[httpx.Request], Awaitable[httpx.Response]]
        ],
    ) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            msg = f"unexpected request {request.method} {request.url}"
            raise AssertionError(msg)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return item
        return await item(request)


async def hang_forever(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
    await asyncio.Event().wait()
    raise AssertionError  # pragma: no cover


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


def make_client(
    bridge: AuthBridge,
    handler: Callable[[httpx.Request], Any],
    **config: Any,
) -> ApiClient:
    """Create an ApiClient talking to an httpx.MockTransport."""
    config.setdefault("base_url", BASE_URL)
    config.setdefault("backoff_strategy", ConstantBackoff(delay=0.0))
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ApiClient(bridge, config=ClientConfig(**config), client=client)
