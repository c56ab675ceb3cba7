"""Menu administration application service.

Bulk operations used by administrators and seed scripts: clearing a
tenant's menus, seeding menus with duplicates skipped, counting, and
listing categories.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from navigation.application.observability import (
    DefaultMenuAdminProbe,
    MenuAdminProbe,
)
from navigation.domain.aggregates import MenuEntry
from navigation.domain.value_objects import MenuId, MenuLocation
from navigation.ports.repositories import (
    ANY_TENANT,
    IMenuRepository,
    MenuFilter,
    TenantFilter,
)


def default_unique_key(entry: MenuEntry) -> Hashable:
    """Seeded menus are unique per (tenant, location, name)."""
    return entry.unique_key()


class MenuAdminService:
    """Application service for bulk menu administration.

    Write operations run inside a transaction on the given session.
    """

    def __init__(
        self,
        repository: IMenuRepository,
        session: AsyncSession,
        probe: MenuAdminProbe | None = None,
    ) -> None:
        """Initialize MenuAdminService with dependencies.

        Args:
            repository: Menu store
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._repository = repository
        self._session = session
        self._probe = probe or DefaultMenuAdminProbe()

    async def clear_tenant_menus(self, tenant_id: str | None) -> int:
        """Delete every menu of a tenant (None clears the global menus).

        Returns:
            Number of deleted menus
        """
        async with self._session.begin():
            deleted = await self._repository.delete_many(MenuFilter(tenant_id=tenant_id))
        self._probe.menus_cleared(tenant_id, deleted)
        return deleted

    async def clear_all_menus(self) -> int:
        """Delete every menu of every tenant, global menus included."""
        async with self._session.begin():
            deleted = await self._repository.delete_many(MenuFilter(tenant_id=ANY_TENANT))
        self._probe.menus_cleared(None, deleted)
        return deleted

    async def seed_menus(self, entries: Sequence[MenuEntry]) -> int:
        """Insert menus, skipping those already present.

        Duplicates are detected by (tenant, location, name), against stored
        menus and earlier entries of the batch. Children whose parent was
        skipped are re-pointed at the kept parent so the hierarchy survives
        re-seeding.

        Returns:
            Number of inserted menus
        """
        async with self._session.begin():
            existing: dict[Hashable, MenuId] = {}
            for tenant_id in {entry.tenant_id for entry in entries}:
                for stored in await self._repository.find_many(
                    MenuFilter(tenant_id=tenant_id)
                ):
                    existing.setdefault(default_unique_key(stored), stored.id)

            remap: dict[MenuId, MenuId] = {}
            for entry in entries:
                kept_id = existing.setdefault(default_unique_key(entry), entry.id)
                if kept_id != entry.id:
                    remap[entry.id] = kept_id

            for entry in entries:
                if entry.parent_id is not None and entry.parent_id in remap:
                    entry.parent_id = remap[entry.parent_id]

            created = await self._repository.create_many(entries, default_unique_key)

        self._probe.menus_seeded(len(entries), created)
        return created

    async def count_menus(
        self,
        tenant_id: TenantFilter = ANY_TENANT,
        location: MenuLocation | None = None,
    ) -> int:
        """Count menus of a tenant scope, optionally at one location."""
        return await self._repository.count(
            MenuFilter(tenant_id=tenant_id, location=location)
        )

    async def list_menus(
        self,
        tenant_id: TenantFilter = ANY_TENANT,
        location: MenuLocation | None = None,
    ) -> list[MenuEntry]:
        """List menus of a tenant scope ordered by (location, order)."""
        return await self._repository.find_many(
            MenuFilter(tenant_id=tenant_id, location=location, ordering="location_order")
        )

    async def list_categories(self, tenant_id: TenantFilter = ANY_TENANT) -> list[str]:
        """Distinct categories used by the menus of a tenant scope."""
        return await self._repository.list_categories(tenant_id)
