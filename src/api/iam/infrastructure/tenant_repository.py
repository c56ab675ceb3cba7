"""PostgreSQL implementation of ITenantRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Tenant
from iam.domain.value_objects import TenantId
from iam.infrastructure.models import TenantModel
from iam.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from iam.ports.repositories import ITenantRepository


def tenant_from_model(model: TenantModel) -> Tenant:
    """Reconstitute a Tenant aggregate from its ORM row."""
    return Tenant(
        id=TenantId(value=model.id),
        name=model.name,
        slug=model.slug,
        type=model.type,
        primary_color=model.primary_color,
        settings=dict(model.settings or {}),
        is_active=model.is_active,
    )


class TenantRepository(ITenantRepository):
    """Repository reading Tenant aggregates from PostgreSQL."""

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Fetch tenant by ID.

        Args:
            tenant_id: The unique identifier of the tenant

        Returns:
            The Tenant aggregate, or None if not found
        """
        stmt = select(TenantModel).where(TenantModel.id == tenant_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.tenant_retrieved(model.id)
        return tenant_from_model(model)

    async def get_by_slug(self, slug: str) -> Tenant | None:
        """Fetch tenant by its unique slug.

        Args:
            slug: The tenant slug

        Returns:
            The Tenant aggregate, or None if not found
        """
        stmt = select(TenantModel).where(TenantModel.slug == slug)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.tenant_slug_not_found(slug)
            return None

        self._probe.tenant_retrieved(model.id)
        return tenant_from_model(model)

    async def list_all(self, active_only: bool = True) -> list[Tenant]:
        """Fetch tenants ordered by name.

        Args:
            active_only: Exclude inactive tenants

        Returns:
            List of Tenant aggregates
        """
        stmt = select(TenantModel).order_by(TenantModel.name)
        if active_only:
            stmt = stmt.where(TenantModel.is_active.is_(True))
        result = await self._session.execute(stmt)

        tenants = [tenant_from_model(model) for model in result.scalars().all()]
        self._probe.tenants_listed(len(tenants))
        return tenants
