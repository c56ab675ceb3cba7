"""Tenant context value object shared across bounded contexts.

A TenantContext is the identity of the tenant a session is currently
working in. It is what the durable client record stores, what the tenant
switch channel carries, and what menu resolution and route guarding are
keyed on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class TenantType(StrEnum):
    """Well-known tenant types.

    Tenant types are free-form strings; these are the kinds the platform
    ships with.
    """

    CORE = "CORE"
    SYSTEM = "SYSTEM"
    BUSINESS = "BUSINESS"
    TRIAL = "TRIAL"
    DEMO = "DEMO"


@dataclass(frozen=True)
class TenantContext:
    """Identity of the current tenant.

    The slug is the sole key used to build tenant-prefixed paths
    (``/{slug}/...``) and is unique across tenants.

    Attributes:
        id: Tenant identifier
        name: Display name
        slug: URL-safe identifier used for route prefixing
        type: Tenant kind, usually one of TenantType
        primary_color: Optional brand color
        settings: Free-form tenant settings
    """

    id: str
    name: str
    slug: str
    type: str = TenantType.BUSINESS
    primary_color: str | None = None
    settings: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON-compatible shape of the durable record."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "type": str(self.type),
            "primaryColor": self.primary_color,
            "settings": dict(self.settings),
        }

    @classmethod
    def from_dict(cls, data: Any) -> TenantContext:
        """Rebuild a context from its durable record shape.

        Args:
            data: Decoded JSON value

        Returns:
            TenantContext instance

        Raises:
            ValueError: If the payload is not an object or lacks id/slug
        """
        if not isinstance(data, dict):
            raise ValueError("Tenant record must be a JSON object")

        tenant_id = data.get("id")
        slug = data.get("slug")
        if not isinstance(tenant_id, str) or not tenant_id:
            raise ValueError("Tenant record is missing 'id'")
        if not isinstance(slug, str) or not slug:
            raise ValueError("Tenant record is missing 'slug'")

        tenant_type = data.get("type") or TenantType.BUSINESS
        if not isinstance(tenant_type, str):
            raise ValueError("Tenant type must be a string")

        settings = data.get("settings") or {}
        if not isinstance(settings, dict):
            raise ValueError("Tenant settings must be a JSON object")

        return cls(
            id=tenant_id,
            name=str(data.get("name") or slug),
            slug=slug,
            type=tenant_type,
            primary_color=data.get("primaryColor"),
            settings=settings,
        )
