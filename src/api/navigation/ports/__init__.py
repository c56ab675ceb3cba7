"""Ports (interfaces) for the navigation bounded context."""

from navigation.ports.durable_store import SESSION_KEYS, DurableKey, IDurableStore
from navigation.ports.exceptions import (
    DurableStoreError,
    MenuStoreUnavailableError,
    TenantAccessDeniedError,
)
from navigation.ports.repositories import (
    ANY_TENANT,
    IMenuRepository,
    MenuFilter,
    UniqueKey,
)

__all__ = [
    "ANY_TENANT",
    "DurableKey",
    "DurableStoreError",
    "IDurableStore",
    "IMenuRepository",
    "MenuFilter",
    "MenuStoreUnavailableError",
    "SESSION_KEYS",
    "TenantAccessDeniedError",
    "UniqueKey",
]
