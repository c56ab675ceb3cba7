"""Unit tests for MenuResolutionService."""

from unittest.mock import create_autospec

import pytest

from navigation.application.observability import MenuResolutionProbe
from navigation.application.services import MenuResolutionService
from navigation.domain.menu_tree import flatten
from navigation.domain.value_objects import MenuLocation, PermissionMatchPolicy
from navigation.infrastructure.in_memory_menu_repository import InMemoryMenuRepository
from navigation.ports import MenuStoreUnavailableError
from shared_kernel.authorization import PermissionKey

USERS_READ = PermissionKey("users", "read", "tenant")
ROLES_WRITE = PermissionKey("roles", "write", "tenant")


@pytest.fixture
def mock_probe():
    return create_autospec(MenuResolutionProbe, instance=True)


@pytest.fixture
def repository(make_entry) -> InMemoryMenuRepository:
    dashboard = make_entry(
        "dashboard", path="/{tenant}/dashboard", tenant_id="tenant-acme"
    )
    admin = make_entry("admin", path="/{tenant}/admin", tenant_id="tenant-acme")
    return InMemoryMenuRepository(
        [
            dashboard,
            admin,
            make_entry(
                "users",
                path="/{tenant}/admin/users",
                tenant_id="tenant-acme",
                parent_id=admin.id,
                required_permissions=(USERS_READ,),
            ),
            make_entry(
                "roles",
                path="/{tenant}/admin/roles",
                tenant_id="tenant-acme",
                parent_id=admin.id,
                required_permissions=(USERS_READ, ROLES_WRITE),
            ),
            make_entry("archived", tenant_id="tenant-acme", is_active=False),
            make_entry("reports", tenant_id="tenant-globex"),
            make_entry(
                "about", location=MenuLocation.FOOTER, path="/about", is_public=True
            ),
            make_entry("internal", location=MenuLocation.FOOTER, path="/internal"),
            make_entry(
                "partner",
                location=MenuLocation.FOOTER,
                tenant_id="tenant-acme",
                is_public=True,
            ),
        ]
    )


@pytest.fixture
def service(repository, mock_probe) -> MenuResolutionService:
    return MenuResolutionService(repository, probe=mock_probe)


def _names(nodes):
    return [node.name for node in flatten(nodes)]


class TestTenantScoping:
    @pytest.mark.asyncio
    async def test_only_active_entries_of_the_tenant(self, service):
        nodes = await service.resolve_menus(
            "tenant-acme", MenuLocation.SIDEBAR, tenant_slug="acme"
        )

        assert _names(nodes) == ["dashboard", "admin", "users", "roles"]
        assert nodes[1].children[0].path == "/acme/admin/users"

    @pytest.mark.asyncio
    async def test_without_tenant_every_public_entry(self, service):
        nodes = await service.resolve_public_menus(MenuLocation.FOOTER)

        assert _names(nodes) == ["about", "partner"]

    @pytest.mark.asyncio
    async def test_tenant_owned_public_entry_is_public_navigation(self, make_entry):
        partner = make_entry(
            "partner",
            location=MenuLocation.HEADER,
            tenant_id="tenant-acme",
            is_public=True,
        )
        private = make_entry(
            "private", location=MenuLocation.HEADER, tenant_id="tenant-acme"
        )
        service = MenuResolutionService(InMemoryMenuRepository([partner, private]))

        nodes = await service.resolve_menus(None, MenuLocation.HEADER)

        assert _names(nodes) == ["partner"]

    @pytest.mark.asyncio
    async def test_tenant_request_excludes_global_entries(self, service):
        nodes = await service.resolve_menus("tenant-acme", MenuLocation.FOOTER)

        assert _names(nodes) == ["partner"]

    @pytest.mark.asyncio
    async def test_unknown_tenant_gets_nothing(self, service):
        assert await service.resolve_menus("tenant-nobody", MenuLocation.SIDEBAR) == []


class TestPermissionFiltering:
    @pytest.mark.asyncio
    async def test_any_policy(self, service):
        nodes = await service.resolve_menus(
            "tenant-acme", MenuLocation.SIDEBAR, held_permissions={USERS_READ}
        )

        assert _names(nodes) == ["dashboard", "admin", "users", "roles"]

    @pytest.mark.asyncio
    async def test_all_policy(self, repository):
        service = MenuResolutionService(repository, policy=PermissionMatchPolicy.ALL)

        nodes = await service.resolve_menus(
            "tenant-acme", MenuLocation.SIDEBAR, held_permissions={USERS_READ}
        )

        assert _names(nodes) == ["dashboard", "admin", "users"]

    @pytest.mark.asyncio
    async def test_no_permissions_hides_protected_entries(self, service):
        nodes = await service.resolve_menus(
            "tenant-acme", MenuLocation.SIDEBAR, held_permissions=frozenset()
        )

        assert _names(nodes) == ["dashboard", "admin"]

    @pytest.mark.asyncio
    async def test_hidden_parent_promotes_visible_child(self, make_entry, mock_probe):
        parent = make_entry(
            "admin", tenant_id="t1", required_permissions=(ROLES_WRITE,)
        )
        child = make_entry("users", tenant_id="t1", parent_id=parent.id)
        service = MenuResolutionService(
            InMemoryMenuRepository([parent, child]), probe=mock_probe
        )

        nodes = await service.resolve_menus(
            "t1", MenuLocation.SIDEBAR, held_permissions=frozenset()
        )

        assert [n.name for n in nodes] == ["users"]
        mock_probe.menu_promoted_to_top_level.assert_called_once_with(
            child.id.value, "missing_parent"
        )


class TestStoreFailures:
    @pytest.mark.asyncio
    async def test_resolve_menus_degrades_to_empty(
        self, service, repository, mock_probe
    ):
        repository.available = False

        assert await service.resolve_menus("tenant-acme", MenuLocation.SIDEBAR) == []
        mock_probe.menus_degraded_to_empty.assert_called_once()

    @pytest.mark.asyncio
    async def test_resolve_menus_or_raise_propagates(self, service, repository):
        repository.available = False

        with pytest.raises(MenuStoreUnavailableError):
            await service.resolve_menus_or_raise("tenant-acme", MenuLocation.SIDEBAR)


class TestResolutionProperties:
    @pytest.mark.asyncio
    async def test_inactive_parent_promotes_active_child(self, make_entry, mock_probe):
        parent = make_entry("settings", tenant_id="t1", is_active=False)
        child = make_entry("profile", tenant_id="t1", parent_id=parent.id)
        sibling = make_entry("home", tenant_id="t1")
        service = MenuResolutionService(
            InMemoryMenuRepository([parent, child, sibling]), probe=mock_probe
        )

        nodes = await service.resolve_menus("t1", MenuLocation.SIDEBAR)

        assert [n.name for n in nodes] == ["profile", "home"]
        assert all(not n.children for n in nodes)
        mock_probe.menu_promoted_to_top_level.assert_called_once_with(
            child.id.value, "missing_parent"
        )

    @pytest.mark.asyncio
    async def test_repeated_resolution_is_identical(self, service):
        first = await service.resolve_menus(
            "tenant-acme",
            MenuLocation.SIDEBAR,
            tenant_slug="acme",
            held_permissions={USERS_READ},
        )
        second = await service.resolve_menus(
            "tenant-acme",
            MenuLocation.SIDEBAR,
            tenant_slug="acme",
            held_permissions={USERS_READ},
        )

        assert [(n.name, n.path) for n in flatten(first)] == [
            (n.name, n.path) for n in flatten(second)
        ]
        assert _names(first) == ["dashboard", "admin", "users", "roles"]
