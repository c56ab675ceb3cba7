"""Pydantic models for tenant API responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from shared_kernel.tenancy import TenantContext


class TenantResponse(BaseModel):
    """Response model for a tenant as the navigation shell sees it."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Tenant ID")
    name: str = Field(..., description="Tenant name")
    slug: str = Field(..., description="URL slug")
    type: str = Field(..., description="Tenant type (CORE, SYSTEM, BUSINESS, TRIAL, DEMO)")
    primary_color: str | None = Field(
        default=None,
        alias="primaryColor",
        description="Brand color used by the shell",
    )
    settings: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_context(cls, tenant: TenantContext) -> TenantResponse:
        """Convert a tenant context to API response."""
        return cls(
            id=tenant.id,
            name=tenant.name,
            slug=tenant.slug,
            type=str(tenant.type),
            primary_color=tenant.primary_color,
            settings=dict(tenant.settings),
        )


class SwitchableTenantsResponse(BaseModel):
    """Tenants the calling user may switch to."""

    tenants: list[TenantResponse]
    count: int
