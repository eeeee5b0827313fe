r"""Credential handling: the auth bridge, the refresh call and the
refresh coordinator."""

from __future__ import annotations

__all__ = [
    "AuthBridge",
    "AuthCoordinator",
    "InMemoryAuthBridge",
    "QueuedRequest",
    "RefreshState",
    "TokenPair",
    "refresh_access_token",
]

from aresclient.auth.bridge import AuthBridge, InMemoryAuthBridge, TokenPair
from aresclient.auth.coordinator import AuthCoordinator, QueuedRequest, RefreshState
from aresclient.auth.refresh import refresh_access_token
