"""HTTP routes for tenant lookups."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import TenantService
from iam.dependencies.tenant import get_tenant_service
from iam.dependencies.user import get_session_user
from iam.ports.exceptions import UnauthorizedError
from iam.presentation.tenants.models import (
    SwitchableTenantsResponse,
    TenantResponse,
)
from shared_kernel.auth.session import SessionUser

router = APIRouter(
    prefix="/tenants",
    tags=["tenants"],
)


@router.get("/switchable")
async def list_switchable_tenants(
    user: Annotated[SessionUser, Depends(get_session_user)],
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> SwitchableTenantsResponse:
    """List the tenants the calling user may switch to.

    Super admins see every active tenant.

    Returns:
        SwitchableTenantsResponse with the tenants in display order
    """
    tenants = await service.list_switchable_tenants(user)
    return SwitchableTenantsResponse(
        tenants=[TenantResponse.from_context(t) for t in tenants],
        count=len(tenants),
    )


@router.get("/by-slug/{slug}")
async def get_tenant_by_slug(
    slug: str,
    user: Annotated[SessionUser, Depends(get_session_user)],
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    """Resolve a URL slug to a tenant the caller can access.

    Raises:
        HTTPException: 404 if no active tenant has the slug
        HTTPException: 403 if the caller holds no assignment in the tenant
    """
    try:
        tenant = await service.get_by_slug(slug, user=user)
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this tenant",
        ) from e

    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tenant {slug} not found",
        )
    return TenantResponse.from_context(tenant)
