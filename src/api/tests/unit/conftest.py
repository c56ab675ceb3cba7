"""Unit test fixtures shared across bounded contexts."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from navigation.domain.aggregates import MenuEntry
from navigation.domain.value_objects import MenuLocation
from shared_kernel.auth.session import SessionUser, TenantMembership
from shared_kernel.authorization.types import PermissionKey, RoleLevel
from shared_kernel.tenancy import TenantContext, TenantType

BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def acme() -> TenantContext:
    return TenantContext(id="tenant-acme", name="Acme", slug="acme")


@pytest.fixture
def globex() -> TenantContext:
    return TenantContext(
        id="tenant-globex", name="Globex", slug="globex", type=TenantType.TRIAL
    )


@pytest.fixture
def make_entry():
    """Factory for menu entries with deterministic creation times."""
    counter = iter(range(10_000))

    def _make(name: str, **kwargs) -> MenuEntry:
        kwargs.setdefault("label", name.title())
        kwargs.setdefault("location", MenuLocation.SIDEBAR)
        if "url" not in kwargs:
            kwargs.setdefault("path", f"/{name}")
        kwargs.setdefault("created_at", BASE_TIME + timedelta(seconds=next(counter)))
        return MenuEntry.create(name=name, **kwargs)

    return _make


@pytest.fixture
def member(acme) -> SessionUser:
    """Regular user holding users:read in Acme."""
    return SessionUser(
        user_id="user-1",
        email="member@example.com",
        memberships=(
            TenantMembership(
                tenant=acme,
                role_name="Member",
                permissions=frozenset({PermissionKey("users", "read", "tenant")}),
                is_primary=True,
            ),
        ),
    )


@pytest.fixture
def super_admin() -> SessionUser:
    return SessionUser(
        user_id="root",
        email="root@example.com",
        role_level=RoleLevel.SUPER_ADMIN,
    )


@pytest.fixture
def mock_session():
    """Mock AsyncSession whose begin() is an async context manager."""
    session = Mock(spec=AsyncSession)

    ctx_manager = AsyncMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=None)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)

    session.begin = Mock(return_value=ctx_manager)
    return session
