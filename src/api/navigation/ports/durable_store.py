"""Durable client record port.

The durable record is a small string key/value store that survives
reloads of a client session. It holds the current tenant, the signed-in
user and the session tokens.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol, runtime_checkable


class DurableKey(StrEnum):
    """Keys of the durable client record."""

    CURRENT_TENANT = "currentTenant"
    USER = "user"
    AUTH_USER = "authUser"
    ACCESS_TOKEN = "accessToken"
    REFRESH_TOKEN = "refreshToken"


# Keys removed on logout
SESSION_KEYS: tuple[DurableKey, ...] = (
    DurableKey.CURRENT_TENANT,
    DurableKey.USER,
    DurableKey.AUTH_USER,
    DurableKey.ACCESS_TOKEN,
    DurableKey.REFRESH_TOKEN,
)


@runtime_checkable
class IDurableStore(Protocol):
    """String key/value storage surviving session reloads."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""
        ...
