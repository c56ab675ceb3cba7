"""Repository protocols (ports) for the navigation bounded context.

These protocols define the interface the application layer uses to read
and bulk-modify menu entries. Implementations live in the infrastructure
layer.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol, Union, runtime_checkable

from navigation.domain.aggregates import MenuEntry
from navigation.domain.value_objects import MenuId, MenuLocation


class _AnyTenant(Enum):
    ANY_TENANT = "ANY_TENANT"


ANY_TENANT = _AnyTenant.ANY_TENANT
"""Filter value matching entries of every tenant, global ones included."""

TenantFilter = Union[str, None, Literal[_AnyTenant.ANY_TENANT]]

MenuOrdering = Literal["order", "location_order"]

UniqueKey = Callable[[MenuEntry], Hashable]


@dataclass(frozen=True)
class MenuFilter:
    """Query parameters for the menu store.

    Attributes:
        tenant_id: Exact tenant match; None matches global entries only and
            ANY_TENANT disables tenant filtering
        location: Restrict to one location
        is_active: Restrict by active flag
        is_public: Restrict by public flag
        category: Restrict to one category
        search: Case-insensitive substring of name or label
        ordering: "order" sorts by (order, created_at); "location_order" by
            (location, order, created_at)
    """

    tenant_id: TenantFilter = ANY_TENANT
    location: MenuLocation | None = None
    is_active: bool | None = None
    is_public: bool | None = None
    category: str | None = None
    search: str | None = None
    ordering: MenuOrdering = "order"

    def matches(self, entry: MenuEntry) -> bool:
        """Evaluate the filter against one entry."""
        if self.tenant_id is not ANY_TENANT and entry.tenant_id != self.tenant_id:
            return False
        if self.location is not None and entry.location != self.location:
            return False
        if self.is_active is not None and entry.is_active != self.is_active:
            return False
        if self.is_public is not None and entry.is_public != self.is_public:
            return False
        if self.category is not None and entry.category != self.category:
            return False
        if self.search:
            needle = self.search.lower()
            if needle not in entry.name.lower() and needle not in entry.label.lower():
                return False
        return True


@runtime_checkable
class IMenuRepository(Protocol):
    """Repository for MenuEntry aggregates.

    Each call is atomic on its own; callers never rely on transactions
    spanning several calls. Transport failures surface as
    MenuStoreUnavailableError.
    """

    async def find_many(self, menu_filter: MenuFilter) -> list[MenuEntry]:
        """Return entries matching the filter in the requested ordering."""
        ...

    async def count(self, menu_filter: MenuFilter) -> int:
        """Count entries matching the filter."""
        ...

    async def delete_many(self, menu_filter: MenuFilter) -> int:
        """Delete entries matching the filter.

        Returns:
            Number of deleted entries
        """
        ...

    async def create_many(
        self, entries: Sequence[MenuEntry], unique_key: UniqueKey
    ) -> int:
        """Insert entries, skipping duplicates.

        An entry is skipped when its unique key equals the key of a stored
        entry or of an earlier entry in the same batch.

        Returns:
            Number of inserted entries
        """
        ...

    async def get_by_id(self, menu_id: MenuId) -> MenuEntry | None:
        """Fetch one entry, or None if it does not exist."""
        ...

    async def list_categories(self, tenant_id: TenantFilter) -> list[str]:
        """Distinct non-null categories of the matching tenant scope, sorted."""
        ...
