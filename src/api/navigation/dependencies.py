"""Dependency injection for Navigation bounded context.

Composes database sessions and navigation settings with the menu store,
the resolution and administration services, and a request-scoped tenant
context resolver. The acting user comes from the IAM context.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.user import get_session_user
from infrastructure.database.dependencies import get_read_session, get_write_session
from infrastructure.settings import NavigationSettings, get_navigation_settings
from navigation.application.route_guard import PermissionsProvider, RouteGuard
from navigation.application.services import MenuAdminService, MenuResolutionService
from navigation.application.tenant_context_resolver import TenantContextResolver
from navigation.domain.value_objects import MenuLocation, PermissionMatchPolicy
from navigation.infrastructure.durable_store import (
    InMemoryDurableStore,
    JsonFileDurableStore,
)
from navigation.infrastructure.menu_repository import MenuRepository
from navigation.ports.durable_store import IDurableStore
from shared_kernel.auth.session import SessionUser


def get_settings_dependency() -> NavigationSettings:
    """Navigation settings as a FastAPI dependency (overridable in tests)."""
    return get_navigation_settings()


def get_menu_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> MenuRepository:
    """Menu store bound to the read session."""
    return MenuRepository(session=session)


def get_menu_admin_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> MenuRepository:
    """Menu store bound to the write session."""
    return MenuRepository(session=session)


def get_menu_resolution_service(
    repository: Annotated[MenuRepository, Depends(get_menu_repository)],
    settings: Annotated[NavigationSettings, Depends(get_settings_dependency)],
) -> MenuResolutionService:
    """MenuResolutionService using the configured permission match policy."""
    return MenuResolutionService(
        repository=repository,
        policy=PermissionMatchPolicy(settings.permission_match_policy),
    )


def get_menu_admin_service(
    repository: Annotated[MenuRepository, Depends(get_menu_admin_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> MenuAdminService:
    """MenuAdminService sharing the write session with its repository."""
    return MenuAdminService(repository=repository, session=session)


def build_durable_store(settings: NavigationSettings) -> IDurableStore:
    """Durable client record: a JSON file when configured, memory otherwise."""
    if settings.durable_store_path:
        return JsonFileDurableStore(settings.durable_store_path)
    return InMemoryDurableStore()


def get_tenant_context_resolver() -> TenantContextResolver:
    """Request-scoped resolver.

    Each HTTP request simulates a fresh client session, so its durable
    record always lives in memory.
    """
    return TenantContextResolver(store=InMemoryDurableStore())


def permissions_for(user: SessionUser) -> PermissionsProvider:
    """Permissions the user holds in a tenant; None for super admins."""

    def provider(tenant):
        if user.is_super_admin:
            return None
        return user.held_permissions(tenant.id)

    return provider


def build_route_guard(
    resolver: TenantContextResolver,
    menu_service: MenuResolutionService,
    settings: NavigationSettings,
    permissions_provider: PermissionsProvider | None = None,
) -> RouteGuard:
    """RouteGuard configured from navigation settings."""
    return RouteGuard(
        resolver,
        menu_service,
        location=MenuLocation(settings.guard_location),
        login_path=settings.login_path,
        landing_segment=settings.landing_segment,
        permissions_provider=permissions_provider,
    )


def get_route_guard(
    resolver: Annotated[TenantContextResolver, Depends(get_tenant_context_resolver)],
    menu_service: Annotated[
        MenuResolutionService, Depends(get_menu_resolution_service)
    ],
    settings: Annotated[NavigationSettings, Depends(get_settings_dependency)],
    user: Annotated[SessionUser, Depends(get_session_user)],
) -> RouteGuard:
    """RouteGuard for the calling user, sharing the request's resolver."""
    return build_route_guard(
        resolver, menu_service, settings, permissions_provider=permissions_for(user)
    )
