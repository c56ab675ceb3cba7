"""Unit tests for InMemoryMenuRepository."""

import pytest

from navigation.domain.value_objects import MenuLocation
from navigation.infrastructure.in_memory_menu_repository import InMemoryMenuRepository
from navigation.ports import ANY_TENANT, MenuFilter, MenuStoreUnavailableError
from navigation.ports.repositories import IMenuRepository


@pytest.fixture
def entries(make_entry):
    return [
        make_entry("users", tenant_id="tenant-acme", order=2, category="ADMIN"),
        make_entry("dashboard", tenant_id="tenant-acme", order=1),
        make_entry("reports", tenant_id="tenant-globex", category="REPORTS"),
        make_entry(
            "home", location=MenuLocation.HEADER, is_public=True, category="ADMIN"
        ),
        make_entry("legacy", tenant_id="tenant-acme", is_active=False),
    ]


@pytest.fixture
def repository(entries) -> InMemoryMenuRepository:
    return InMemoryMenuRepository(entries)


def test_satisfies_protocol(repository):
    assert isinstance(repository, IMenuRepository)


class TestFindMany:
    @pytest.mark.asyncio
    async def test_tenant_filter_is_exact(self, repository):
        found = await repository.find_many(
            MenuFilter(tenant_id="tenant-acme", is_active=True)
        )

        assert [e.name for e in found] == ["dashboard", "users"]

    @pytest.mark.asyncio
    async def test_none_tenant_means_global_only(self, repository):
        found = await repository.find_many(MenuFilter(tenant_id=None))

        assert [e.name for e in found] == ["home"]

    @pytest.mark.asyncio
    async def test_any_tenant_matches_everything(self, repository):
        assert len(await repository.find_many(MenuFilter(tenant_id=ANY_TENANT))) == 5

    @pytest.mark.asyncio
    async def test_search_matches_name_or_label(self, repository):
        found = await repository.find_many(MenuFilter(search="REPO"))

        assert [e.name for e in found] == ["reports"]

    @pytest.mark.asyncio
    async def test_location_ordering(self, repository):
        found = await repository.find_many(MenuFilter(ordering="location_order"))

        assert found[0].location is MenuLocation.HEADER


class TestMutations:
    @pytest.mark.asyncio
    async def test_count_and_delete(self, repository):
        acme = MenuFilter(tenant_id="tenant-acme")

        assert await repository.count(acme) == 3
        assert await repository.delete_many(acme) == 3
        assert await repository.count(acme) == 0
        assert await repository.count(MenuFilter()) == 2

    @pytest.mark.asyncio
    async def test_delete_detaches_surviving_children(self, make_entry):
        parent = make_entry("admin", tenant_id="tenant-acme")
        child = make_entry("users", tenant_id="tenant-acme", parent_id=parent.id)
        repository = InMemoryMenuRepository([parent, child])

        await repository.delete_many(MenuFilter(search="admin"))

        survivor = await repository.get_by_id(child.id)
        assert survivor is not None
        assert survivor.parent_id is None

    @pytest.mark.asyncio
    async def test_create_many_skips_existing_and_batch_duplicates(
        self, repository, make_entry
    ):
        batch = [
            make_entry("users", tenant_id="tenant-acme"),
            make_entry("billing", tenant_id="tenant-acme"),
            make_entry("billing", tenant_id="tenant-acme"),
        ]

        created = await repository.create_many(batch, lambda e: e.unique_key())

        assert created == 1
        assert await repository.count(MenuFilter(search="billing")) == 1

    @pytest.mark.asyncio
    async def test_list_categories_distinct_and_sorted(self, repository):
        assert await repository.list_categories(ANY_TENANT) == ["ADMIN", "REPORTS"]
        assert await repository.list_categories("tenant-globex") == ["REPORTS"]
        assert await repository.list_categories(None) == ["ADMIN"]


class TestAvailability:
    @pytest.mark.asyncio
    async def test_offline_store_raises(self, repository):
        repository.available = False

        with pytest.raises(MenuStoreUnavailableError):
            await repository.find_many(MenuFilter())

        with pytest.raises(MenuStoreUnavailableError):
            await repository.count(MenuFilter())
