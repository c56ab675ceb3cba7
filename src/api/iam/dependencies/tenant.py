"""Dependency providers for tenant lookups."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from iam.application.services import TenantService
from iam.infrastructure.tenant_repository import TenantRepository
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_read_session


def get_tenant_service_probe() -> TenantServiceProbe:
    """Get TenantServiceProbe instance.

    Returns:
        DefaultTenantServiceProbe instance for observability
    """
    return DefaultTenantServiceProbe()


def get_tenant_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> TenantRepository:
    """Get TenantRepository instance bound to the read session."""
    return TenantRepository(session=session)


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> UserRepository:
    """Get UserRepository instance bound to the read session."""
    return UserRepository(session=session)


def get_tenant_service(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    probe: Annotated[TenantServiceProbe, Depends(get_tenant_service_probe)],
) -> TenantService:
    """Get TenantService instance.

    Both repositories share the request's read session via FastAPI
    dependency caching.
    """
    return TenantService(
        tenant_repository=tenant_repo,
        user_repository=user_repo,
        probe=probe,
    )
