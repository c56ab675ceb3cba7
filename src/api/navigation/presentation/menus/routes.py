"""HTTP routes for menu resolution and administration."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.dependencies.user import get_session_user
from navigation.application.services import MenuAdminService, MenuResolutionService
from navigation.dependencies import (
    get_menu_admin_service,
    get_menu_resolution_service,
)
from navigation.domain.value_objects import MenuLocation
from navigation.ports.exceptions import MenuStoreUnavailableError
from navigation.ports.repositories import ANY_TENANT
from navigation.presentation.menus.models import (
    BatchCreateMenusRequest,
    BatchCreateMenusResponse,
    DeleteMenusResponse,
    MenuCategoriesResponse,
    MenuCountResponse,
    MenuResponse,
    MenuTreeResponse,
)
from shared_kernel.auth.session import SessionUser

router = APIRouter(
    prefix="/menus",
    tags=["menus"],
)


def require_super_admin(
    user: Annotated[SessionUser, Depends(get_session_user)],
) -> SessionUser:
    """Menu administration is reserved to super admins.

    Raises:
        HTTPException 403: If the caller is not a super admin
    """
    if not user.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Menu administration requires super admin",
        )
    return user


def _store_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Menu store unavailable",
    )


@router.get("/public/{location}")
async def get_public_menus(
    location: MenuLocation,
    service: Annotated[MenuResolutionService, Depends(get_menu_resolution_service)],
) -> MenuTreeResponse:
    """Public global navigation shown without a tenant.

    Degrades to an empty tree when the menu store is unavailable.
    """
    nodes = await service.resolve_public_menus(location)
    return MenuTreeResponse(
        tenant_id=None,
        location=location,
        menus=[MenuResponse.from_domain(node) for node in nodes],
    )


@router.get("/tree")
async def get_menu_tree(
    user: Annotated[SessionUser, Depends(get_session_user)],
    service: Annotated[MenuResolutionService, Depends(get_menu_resolution_service)],
    tenant_id: str = Query(..., min_length=1),
    location: MenuLocation = Query(default=MenuLocation.SIDEBAR),
    tenant_slug: str | None = Query(default=None),
) -> MenuTreeResponse:
    """Menu tree of a tenant as the calling user may see it.

    Super admins see every active menu; everyone else only menus whose
    required permissions they hold in the tenant. Tenant placeholders are
    resolved with the given slug, or the slug of the caller's membership.

    Raises:
        HTTPException: 403 if the caller cannot access the tenant
        HTTPException: 503 if the menu store is unavailable
    """
    if not user.can_access_tenant(tenant_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this tenant",
        )

    membership = user.membership_for(tenant_id)
    if tenant_slug is None and membership is not None:
        tenant_slug = membership.tenant.slug

    try:
        nodes = await service.resolve_menus_or_raise(
            tenant_id,
            location,
            tenant_slug=tenant_slug,
            held_permissions=None
            if user.is_super_admin
            else user.held_permissions(tenant_id),
        )
    except MenuStoreUnavailableError as e:
        raise _store_unavailable() from e

    return MenuTreeResponse(
        tenant_id=tenant_id,
        location=location,
        menus=[MenuResponse.from_domain(node) for node in nodes],
    )


@router.get("/categories")
async def list_menu_categories(
    _: Annotated[SessionUser, Depends(require_super_admin)],
    service: Annotated[MenuAdminService, Depends(get_menu_admin_service)],
    tenant_id: str | None = Query(default=None),
) -> MenuCategoriesResponse:
    """Distinct menu categories, for one tenant or across all of them."""
    try:
        categories = await service.list_categories(
            tenant_id if tenant_id is not None else ANY_TENANT
        )
    except MenuStoreUnavailableError as e:
        raise _store_unavailable() from e
    return MenuCategoriesResponse(categories=categories)


@router.get("/count")
async def count_menus(
    _: Annotated[SessionUser, Depends(require_super_admin)],
    service: Annotated[MenuAdminService, Depends(get_menu_admin_service)],
    tenant_id: str | None = Query(default=None),
    location: MenuLocation | None = Query(default=None),
) -> MenuCountResponse:
    """Count menus, for one tenant or across all of them."""
    try:
        count = await service.count_menus(
            tenant_id if tenant_id is not None else ANY_TENANT, location
        )
    except MenuStoreUnavailableError as e:
        raise _store_unavailable() from e
    return MenuCountResponse(count=count)


@router.delete("")
async def delete_menus(
    _: Annotated[SessionUser, Depends(require_super_admin)],
    service: Annotated[MenuAdminService, Depends(get_menu_admin_service)],
    tenant_id: str | None = Query(default=None),
    all_tenants: bool = Query(default=False),
) -> DeleteMenusResponse:
    """Delete the menus of a tenant.

    Without tenant_id the global menus are deleted; all_tenants deletes
    every menu.
    """
    try:
        if all_tenants:
            deleted = await service.clear_all_menus()
        else:
            deleted = await service.clear_tenant_menus(tenant_id)
    except MenuStoreUnavailableError as e:
        raise _store_unavailable() from e
    return DeleteMenusResponse(deleted=deleted)


@router.post("/batch", status_code=status.HTTP_201_CREATED)
async def create_menus(
    request: BatchCreateMenusRequest,
    _: Annotated[SessionUser, Depends(require_super_admin)],
    service: Annotated[MenuAdminService, Depends(get_menu_admin_service)],
) -> BatchCreateMenusResponse:
    """Seed menus; menus already present by (tenant, location, name) are skipped."""
    entries = request.to_domain()
    try:
        created = await service.seed_menus(entries)
    except MenuStoreUnavailableError as e:
        raise _store_unavailable() from e
    return BatchCreateMenusResponse(
        requested=len(entries),
        created=created,
        skipped=len(entries) - created,
    )
