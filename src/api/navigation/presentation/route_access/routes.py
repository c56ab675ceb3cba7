"""HTTP route running the route guard for a simulated client session."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import TenantService
from iam.dependencies.tenant import get_tenant_service
from iam.dependencies.user import get_session_user
from navigation.application.route_guard import RouteGuard
from navigation.application.tenant_context_resolver import TenantContextResolver
from navigation.dependencies import get_route_guard, get_tenant_context_resolver
from navigation.ports.exceptions import TenantAccessDeniedError
from navigation.presentation.route_access.models import (
    RouteAccessRequest,
    RouteAccessResponse,
)
from shared_kernel.auth.session import SessionUser
from shared_kernel.tenancy import TenantContext

router = APIRouter(
    prefix="/route-access",
    tags=["route-access"],
)


async def _lookup_tenant(
    request: RouteAccessRequest,
    user: SessionUser,
    tenants: TenantService,
) -> TenantContext | None:
    if request.tenant_id is not None:
        membership = user.membership_for(request.tenant_id)
        if membership is not None:
            return membership.tenant
        return await tenants.get_tenant(request.tenant_id)
    if request.tenant_slug is not None:
        return await tenants.get_by_slug(request.tenant_slug)
    return None


@router.post("")
async def check_route_access(
    request: RouteAccessRequest,
    user: Annotated[SessionUser, Depends(get_session_user)],
    tenants: Annotated[TenantService, Depends(get_tenant_service)],
    resolver: Annotated[TenantContextResolver, Depends(get_tenant_context_resolver)],
    guard: Annotated[RouteGuard, Depends(get_route_guard)],
) -> RouteAccessResponse:
    """Check whether the caller may open a route in a tenant.

    The tenant is selected on a fresh session first; the guard then
    allows the route or names where to redirect.

    Raises:
        HTTPException: 404 if the named tenant does not exist
        HTTPException: 403 if the caller cannot switch to the tenant
    """
    if request.tenant_id is not None or request.tenant_slug is not None:
        tenant = await _lookup_tenant(request, user, tenants)
        if tenant is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Tenant not found",
            )
        try:
            resolver.switch_tenant(user, tenant)
        except TenantAccessDeniedError as e:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have access to this tenant",
            ) from e

    outcome = await guard.check(request.path)
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Route check was superseded",
        )
    return RouteAccessResponse.from_domain(outcome)
