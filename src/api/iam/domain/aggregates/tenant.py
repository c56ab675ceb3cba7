"""Tenant aggregate for IAM context."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from iam.domain.value_objects import TenantId
from shared_kernel.tenancy import TenantContext, TenantType

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def validate_slug(slug: str) -> str:
    """Validate a tenant slug.

    Slugs are lowercase alphanumerics separated by single hyphens, so they
    can be used as a path segment without escaping.

    Raises:
        ValueError: If the slug is not URL-safe
    """
    if not _SLUG_PATTERN.match(slug):
        raise ValueError(f"Invalid tenant slug: {slug!r}")
    return slug


@dataclass
class Tenant:
    """Tenant aggregate representing an organization in the system.

    Tenants are the top-level isolation boundary. Navigation and data of a
    tenant are addressed through its slug (``/{slug}/...``).

    Business rules:
    - Slugs are URL-safe and globally unique
    - Inactive tenants are hidden from tenant switchers
    """

    id: TenantId
    name: str
    slug: str
    type: str = TenantType.BUSINESS
    primary_color: str | None = None
    settings: dict[str, Any] = field(default_factory=dict)
    is_active: bool = True

    def __post_init__(self) -> None:
        validate_slug(self.slug)

    @classmethod
    def create(
        cls,
        name: str,
        slug: str,
        type: str = TenantType.BUSINESS,
        primary_color: str | None = None,
    ) -> Tenant:
        """Factory method for creating a new tenant.

        Args:
            name: The display name of the tenant
            slug: URL-safe identifier
            type: Tenant kind
            primary_color: Optional brand color

        Returns:
            A new Tenant aggregate
        """
        return cls(
            id=TenantId.generate(),
            name=name,
            slug=slug,
            type=type,
            primary_color=primary_color,
        )

    def to_context(self) -> TenantContext:
        """Project the tenant onto the shared TenantContext value object."""
        return TenantContext(
            id=self.id.value,
            name=self.name,
            slug=self.slug,
            type=self.type,
            primary_color=self.primary_color,
            settings=dict(self.settings),
        )
