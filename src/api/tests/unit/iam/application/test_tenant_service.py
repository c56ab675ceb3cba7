"""Unit tests for TenantService."""

from unittest.mock import create_autospec

import pytest

from iam.application.observability import TenantServiceProbe
from iam.application.services import TenantService
from iam.domain.aggregates import Tenant
from iam.domain.value_objects import TenantId, UserId
from iam.ports.exceptions import UnauthorizedError, UnknownUserError
from iam.ports.repositories import ITenantRepository, IUserRepository


@pytest.fixture
def mock_tenant_repository():
    return create_autospec(ITenantRepository, instance=True)


@pytest.fixture
def mock_user_repository():
    return create_autospec(IUserRepository, instance=True)


@pytest.fixture
def mock_probe():
    return create_autospec(TenantServiceProbe, instance=True)


@pytest.fixture
def tenant_service(mock_tenant_repository, mock_user_repository, mock_probe):
    return TenantService(
        tenant_repository=mock_tenant_repository,
        user_repository=mock_user_repository,
        probe=mock_probe,
    )


def _tenant(tenant_id: str, slug: str, is_active: bool = True) -> Tenant:
    return Tenant(
        id=TenantId(value=tenant_id),
        name=slug.title(),
        slug=slug,
        is_active=is_active,
    )


class TestGetSessionUser:
    @pytest.mark.asyncio
    async def test_returns_session_user(
        self, tenant_service, mock_user_repository, member
    ):
        mock_user_repository.get_session_user.return_value = member

        assert await tenant_service.get_session_user(UserId(value="user-1")) is member

    @pytest.mark.asyncio
    async def test_unknown_user_raises(
        self, tenant_service, mock_user_repository, mock_probe
    ):
        mock_user_repository.get_session_user.return_value = None

        with pytest.raises(UnknownUserError):
            await tenant_service.get_session_user(UserId(value="ghost"))

        mock_probe.unknown_user.assert_called_once_with("ghost")


class TestListSwitchableTenants:
    @pytest.mark.asyncio
    async def test_member_gets_membership_tenants(
        self, tenant_service, mock_tenant_repository, member, acme
    ):
        tenants = await tenant_service.list_switchable_tenants(member)

        assert tenants == [acme]
        mock_tenant_repository.list_all.assert_not_called()

    @pytest.mark.asyncio
    async def test_super_admin_gets_every_active_tenant(
        self, tenant_service, mock_tenant_repository, super_admin, mock_probe
    ):
        mock_tenant_repository.list_all.return_value = [
            _tenant("t1", "acme"),
            _tenant("t2", "globex"),
        ]

        tenants = await tenant_service.list_switchable_tenants(super_admin)

        assert [t.slug for t in tenants] == ["acme", "globex"]
        mock_tenant_repository.list_all.assert_called_once_with(active_only=True)
        mock_probe.switchable_tenants_listed.assert_called_once_with("root", 2)

    @pytest.mark.asyncio
    async def test_loads_user_from_id(
        self, tenant_service, mock_user_repository, member
    ):
        mock_user_repository.get_session_user.return_value = member

        tenants = await tenant_service.list_switchable_tenants(UserId(value="user-1"))

        assert [t.slug for t in tenants] == ["acme"]


class TestGetBySlug:
    @pytest.mark.asyncio
    async def test_resolves_accessible_tenant(
        self, tenant_service, mock_tenant_repository, member
    ):
        mock_tenant_repository.get_by_slug.return_value = _tenant("tenant-acme", "acme")

        tenant = await tenant_service.get_by_slug("acme", user=member)

        assert tenant.id == "tenant-acme"

    @pytest.mark.asyncio
    async def test_inaccessible_tenant_raises(
        self, tenant_service, mock_tenant_repository, member
    ):
        mock_tenant_repository.get_by_slug.return_value = _tenant(
            "tenant-globex", "globex"
        )

        with pytest.raises(UnauthorizedError):
            await tenant_service.get_by_slug("globex", user=member)

    @pytest.mark.asyncio
    async def test_without_user_skips_access_check(
        self, tenant_service, mock_tenant_repository
    ):
        mock_tenant_repository.get_by_slug.return_value = _tenant(
            "tenant-globex", "globex"
        )

        assert (await tenant_service.get_by_slug("globex")).slug == "globex"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("stored", [None, "inactive"])
    async def test_missing_or_inactive_returns_none(
        self, tenant_service, mock_tenant_repository, mock_probe, stored
    ):
        mock_tenant_repository.get_by_slug.return_value = (
            _tenant("t1", "acme", is_active=False) if stored else None
        )

        assert await tenant_service.get_by_slug("acme") is None
        mock_probe.tenant_not_found.assert_called_once_with("acme")


class TestGetTenant:
    @pytest.mark.asyncio
    async def test_active_tenant(self, tenant_service, mock_tenant_repository):
        mock_tenant_repository.get_by_id.return_value = _tenant("t1", "acme")

        tenant = await tenant_service.get_tenant("t1")

        assert tenant.slug == "acme"
        mock_tenant_repository.get_by_id.assert_called_once_with(TenantId(value="t1"))

    @pytest.mark.asyncio
    async def test_inactive_tenant(self, tenant_service, mock_tenant_repository):
        mock_tenant_repository.get_by_id.return_value = _tenant(
            "t1", "acme", is_active=False
        )

        assert await tenant_service.get_tenant("t1") is None
