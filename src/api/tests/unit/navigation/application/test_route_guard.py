"""Unit tests for RouteGuard."""

from unittest.mock import Mock, create_autospec

import pytest

from navigation.application.observability import RouteGuardProbe
from navigation.application.route_guard import RouteGuard
from navigation.application.services import MenuResolutionService
from navigation.application.tenant_context_resolver import TenantContextResolver
from navigation.domain.value_objects import GuardReason, GuardState
from navigation.infrastructure.durable_store import InMemoryDurableStore
from navigation.infrastructure.in_memory_menu_repository import InMemoryMenuRepository
from shared_kernel.authorization import PermissionKey

USERS_READ = PermissionKey("users", "read", "tenant")


@pytest.fixture
def repository(make_entry) -> InMemoryMenuRepository:
    return InMemoryMenuRepository(
        [
            make_entry("dashboard", path="/{tenant}/dashboard", tenant_id="tenant-acme"),
            make_entry(
                "users",
                path="/{tenant}/users",
                tenant_id="tenant-acme",
                required_permissions=(USERS_READ,),
            ),
            make_entry("reports", path="/{tenant}/reports", tenant_id="tenant-globex"),
        ]
    )


@pytest.fixture
def resolver() -> TenantContextResolver:
    return TenantContextResolver(InMemoryDurableStore())


@pytest.fixture
def menu_service(repository) -> MenuResolutionService:
    return MenuResolutionService(repository)


@pytest.fixture
def mock_probe():
    return create_autospec(RouteGuardProbe, instance=True)


@pytest.fixture
def guard(resolver, menu_service, mock_probe) -> RouteGuard:
    return RouteGuard(resolver, menu_service, probe=mock_probe)


class TestCheck:
    @pytest.mark.asyncio
    async def test_without_tenant_redirects_to_login(self, guard, repository):
        repository.available = False

        outcome = await guard.check("/acme/users")

        assert outcome.state is GuardState.REDIRECTING
        assert outcome.redirect_to == "/login"
        assert outcome.reason is GuardReason.NO_TENANT
        assert not outcome.indeterminate

    @pytest.mark.asyncio
    async def test_menu_path_allows(self, guard, resolver, acme):
        resolver.set_current(acme)

        outcome = await guard.check("/acme/users/42")

        assert outcome.allowed
        assert outcome.reason is GuardReason.MENU_MATCH
        assert guard.state is GuardState.ALLOWED
        assert guard.outcome is outcome

    @pytest.mark.asyncio
    async def test_unknown_path_redirects_to_tenant_landing(self, guard, resolver, acme):
        resolver.set_current(acme)

        outcome = await guard.check("/acme/billing")

        assert outcome.state is GuardState.REDIRECTING
        assert outcome.redirect_to == "/acme/dashboard"
        assert outcome.reason is GuardReason.NO_MATCHING_MENU
        assert outcome.tenant_id == "tenant-acme"

    @pytest.mark.asyncio
    async def test_other_tenant_menus_do_not_authorize(self, guard, resolver, acme):
        resolver.set_current(acme)

        outcome = await guard.check("/acme/reports")

        assert not outcome.allowed

    @pytest.mark.asyncio
    async def test_store_outage_is_indeterminate_redirect(
        self, guard, resolver, repository, acme, mock_probe
    ):
        resolver.set_current(acme)
        repository.available = False

        outcome = await guard.check("/acme/users")

        assert outcome.state is GuardState.REDIRECTING
        assert outcome.reason is GuardReason.MENU_STORE_UNAVAILABLE
        assert outcome.indeterminate
        mock_probe.access_indeterminate.assert_called_once_with(
            "/acme/users", "menu_store_unavailable"
        )

    @pytest.mark.asyncio
    async def test_resolver_failure_redirects_to_durable_landing(self, menu_service):
        resolver = Mock(spec=TenantContextResolver)
        resolver.resolve.side_effect = RuntimeError("corrupt")
        resolver.durable_slug.return_value = "acme"
        guard = RouteGuard(resolver, menu_service)

        outcome = await guard.check("/acme/users")

        assert outcome.reason is GuardReason.RESOLUTION_ERROR
        assert outcome.redirect_to == "/acme/dashboard"

    @pytest.mark.asyncio
    async def test_permissions_provider_filters_menus(
        self, resolver, menu_service, acme
    ):
        resolver.set_current(acme)
        guard = RouteGuard(
            resolver, menu_service, permissions_provider=lambda tenant: frozenset()
        )

        assert not (await guard.check("/acme/users")).allowed
        assert (await guard.check("/acme/dashboard")).allowed

    @pytest.mark.asyncio
    async def test_on_redirect_receives_redirects_only(
        self, resolver, menu_service, acme
    ):
        redirects = []
        resolver.set_current(acme)
        guard = RouteGuard(resolver, menu_service, on_redirect=redirects.append)

        await guard.check("/acme/dashboard")
        await guard.check("/acme/billing")

        assert [o.path for o in redirects] == ["/acme/billing"]

    @pytest.mark.asyncio
    async def test_custom_login_and_landing(self, menu_service, resolver, acme):
        guard = RouteGuard(
            resolver, menu_service, login_path="/signin", landing_segment="home"
        )

        assert (await guard.check("/x")).redirect_to == "/signin"

        resolver.set_current(acme)
        assert (await guard.check("/acme/billing")).redirect_to == "/acme/home"


class TestTenantSwitch:
    @pytest.mark.asyncio
    async def test_switch_rechecks_last_path(self, guard, resolver, acme, globex):
        resolver.set_current(acme)
        guard.attach()
        await guard.check("/acme/users")

        resolver.set_current(globex)
        await guard.wait_for_pending()

        assert guard.outcome.tenant_id == "tenant-globex"
        assert guard.outcome.redirect_to == "/globex/dashboard"

    @pytest.mark.asyncio
    async def test_check_superseded_by_switch_is_discarded(
        self, guard, resolver, menu_service, acme, globex, mock_probe
    ):
        resolver.set_current(acme)
        guard.attach()
        original = menu_service.resolve_menus_or_raise

        async def switch_during_first_resolution(*args, **kwargs):
            nodes = await original(*args, **kwargs)
            if kwargs["tenant_slug"] == "acme":
                resolver.set_current(globex)
            return nodes

        menu_service.resolve_menus_or_raise = switch_during_first_resolution

        assert await guard.check("/acme/users") is None
        mock_probe.stale_check_discarded.assert_called_once()

        await guard.wait_for_pending()

        assert guard.outcome.tenant_id == "tenant-globex"
        assert guard.state is GuardState.REDIRECTING

    def test_switch_without_loop_only_invalidates(self, guard, resolver, acme):
        guard.attach()
        before = guard.generation

        resolver.set_current(acme)

        assert guard.generation == before + 1
        assert guard.state is GuardState.CHECKING

    def test_detach_stops_following_switches(self, guard, resolver, acme):
        guard.attach()
        guard.detach()
        before = guard.generation

        resolver.set_current(acme)

        assert guard.generation == before
        assert resolver.notifier.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_logout_rechecks_to_login(self, guard, resolver, acme):
        resolver.set_current(acme)
        guard.attach()
        await guard.check("/acme/users")

        resolver.clear()
        await guard.wait_for_pending()

        assert guard.outcome.redirect_to == "/login"
