"""In-memory implementation of IMenuRepository.

Keeps entries in a dictionary keyed by ID. Used for local development
seeding and by tests; data is lost on restart.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence

from navigation.domain.aggregates import MenuEntry
from navigation.domain.value_objects import MenuId
from navigation.ports.exceptions import MenuStoreUnavailableError
from navigation.ports.repositories import MenuFilter, TenantFilter, UniqueKey


class InMemoryMenuRepository:
    """In-memory storage for menu entries.

    Setting ``available`` to False makes every call raise
    MenuStoreUnavailableError, mimicking an unreachable database.
    """

    def __init__(self, entries: Iterable[MenuEntry] = ()) -> None:
        """Initialize the store with optional entries."""
        self._store: dict[MenuId, MenuEntry] = {}
        self.available = True
        for entry in entries:
            self._store[entry.id] = entry

    def _check_available(self) -> None:
        if not self.available:
            raise MenuStoreUnavailableError("In-memory menu store is offline")

    def add(self, entry: MenuEntry) -> None:
        """Store or replace a single entry."""
        self._store[entry.id] = entry

    async def find_many(self, menu_filter: MenuFilter) -> list[MenuEntry]:
        """Return entries matching the filter in the requested ordering."""
        self._check_available()
        matches = [entry for entry in self._store.values() if menu_filter.matches(entry)]
        if menu_filter.ordering == "location_order":
            return sorted(matches, key=lambda e: (e.location.value, *e.sort_key))
        return sorted(matches, key=lambda e: e.sort_key)

    async def count(self, menu_filter: MenuFilter) -> int:
        """Count entries matching the filter."""
        self._check_available()
        return sum(1 for entry in self._store.values() if menu_filter.matches(entry))

    async def delete_many(self, menu_filter: MenuFilter) -> int:
        """Delete matching entries; children of deleted entries lose their parent."""
        self._check_available()
        doomed = {
            menu_id for menu_id, entry in self._store.items() if menu_filter.matches(entry)
        }
        for menu_id in doomed:
            del self._store[menu_id]
        for entry in self._store.values():
            if entry.parent_id in doomed:
                entry.parent_id = None
        return len(doomed)

    async def create_many(
        self, entries: Sequence[MenuEntry], unique_key: UniqueKey
    ) -> int:
        """Insert entries, skipping duplicates by the given key."""
        self._check_available()
        seen: set[Hashable] = {unique_key(entry) for entry in self._store.values()}
        created = 0
        for entry in entries:
            key = unique_key(entry)
            if key in seen:
                continue
            seen.add(key)
            self._store[entry.id] = entry
            created += 1
        return created

    async def get_by_id(self, menu_id: MenuId) -> MenuEntry | None:
        """Fetch one entry, or None if it does not exist."""
        self._check_available()
        return self._store.get(menu_id)

    async def list_categories(self, tenant_id: TenantFilter) -> list[str]:
        """Distinct non-null categories of the matching tenant scope, sorted."""
        self._check_available()
        menu_filter = MenuFilter(tenant_id=tenant_id)
        return sorted(
            {
                entry.category
                for entry in self._store.values()
                if entry.category is not None and menu_filter.matches(entry)
            }
        )
