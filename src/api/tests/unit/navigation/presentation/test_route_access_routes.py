"""Unit tests for the route access HTTP route."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.application.services import TenantService
from navigation.application.services import MenuResolutionService
from navigation.infrastructure.in_memory_menu_repository import InMemoryMenuRepository
from shared_kernel.authorization import PermissionKey


@pytest.fixture
def repository(make_entry) -> InMemoryMenuRepository:
    return InMemoryMenuRepository(
        [
            make_entry("dashboard", path="/{tenant}/dashboard", tenant_id="tenant-acme"),
            make_entry(
                "users",
                path="/{tenant}/admin/users",
                tenant_id="tenant-acme",
                required_permissions=(PermissionKey("users", "read", "tenant"),),
            ),
            make_entry(
                "roles",
                path="/{tenant}/admin/roles",
                tenant_id="tenant-acme",
                required_permissions=(PermissionKey("roles", "write", "tenant"),),
            ),
            make_entry("reports", path="/{tenant}/reports", tenant_id="tenant-globex"),
        ]
    )


@pytest.fixture
def mock_tenant_service() -> AsyncMock:
    return AsyncMock(spec=TenantService)


@pytest.fixture
def current_user(member):
    return {"user": member}


@pytest.fixture
def test_client(repository, mock_tenant_service, current_user) -> TestClient:
    from iam.dependencies.tenant import get_tenant_service
    from iam.dependencies.user import get_session_user
    from navigation.dependencies import get_menu_resolution_service
    from navigation.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_session_user] = lambda: current_user["user"]
    app.dependency_overrides[get_tenant_service] = lambda: mock_tenant_service
    app.dependency_overrides[get_menu_resolution_service] = (
        lambda: MenuResolutionService(repository)
    )
    app.include_router(router)

    return TestClient(app)


def _check(client: TestClient, **payload):
    return client.post("/navigation/route-access", json=payload)


class TestRouteAccess:
    def test_without_tenant_redirects_to_login(self, test_client):
        response = _check(test_client, path="/acme/dashboard")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["state"] == "REDIRECTING"
        assert body["redirect_to"] == "/login"
        assert body["reason"] == "no_tenant"

    def test_member_route_is_allowed(self, test_client, mock_tenant_service):
        response = _check(test_client, path="/acme/admin/users/7", tenant_id="tenant-acme")

        body = response.json()
        assert body["allowed"] is True
        assert body["state"] == "ALLOWED"
        assert body["tenant_id"] == "tenant-acme"
        mock_tenant_service.get_tenant.assert_not_called()

    def test_route_without_permission_redirects(self, test_client):
        response = _check(test_client, path="/acme/admin/roles", tenant_id="tenant-acme")

        body = response.json()
        assert body["allowed"] is False
        assert body["redirect_to"] == "/acme/dashboard"
        assert body["indeterminate"] is False

    def test_foreign_tenant_is_forbidden(self, test_client, mock_tenant_service, globex):
        mock_tenant_service.get_tenant.return_value = globex

        response = _check(test_client, path="/globex/reports", tenant_id="tenant-globex")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_tenant_is_not_found(self, test_client, mock_tenant_service):
        mock_tenant_service.get_by_slug.return_value = None

        response = _check(test_client, path="/x/dashboard", tenant_slug="nowhere")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_super_admin_by_slug(
        self, test_client, mock_tenant_service, current_user, super_admin, globex
    ):
        current_user["user"] = super_admin
        mock_tenant_service.get_by_slug.return_value = globex

        response = _check(test_client, path="/globex/reports", tenant_slug="globex")

        assert response.json()["allowed"] is True
        mock_tenant_service.get_by_slug.assert_called_once_with("globex")

    def test_store_outage_is_reported_as_indeterminate(self, test_client, repository):
        repository.available = False

        response = _check(test_client, path="/acme/dashboard", tenant_id="tenant-acme")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["allowed"] is False
        assert body["indeterminate"] is True
        assert body["reason"] == "menu_store_unavailable"
        assert body["redirect_to"] == "/acme/dashboard"
