"""Signed-in user as seen by tenant-scoped features.

Identity is established upstream; these value objects only carry what menu
resolution and tenant switching consume: the user's role level and the
tenants they belong to, each with the role and permissions held there.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from shared_kernel.authorization.types import PermissionKey, RoleLevel, priority_for
from shared_kernel.tenancy.tenant_context import TenantContext


@dataclass(frozen=True)
class TenantMembership:
    """A user's membership in one tenant."""

    tenant: TenantContext
    role_name: str
    role_level: RoleLevel = RoleLevel.USER
    permissions: frozenset[PermissionKey] = field(default_factory=frozenset)
    is_primary: bool = False

    @property
    def priority(self) -> int:
        return priority_for(self.role_level)


@dataclass(frozen=True)
class SessionUser:
    """The acting user of a session.

    Attributes:
        user_id: User identifier
        email: Login email
        role_level: Highest platform-wide role level of the user
        memberships: Tenant memberships of the user
    """

    user_id: str
    email: str
    role_level: RoleLevel = RoleLevel.USER
    memberships: tuple[TenantMembership, ...] = ()

    @property
    def is_super_admin(self) -> bool:
        """Super admins bypass tenant scoping."""
        return self.role_level == RoleLevel.SUPER_ADMIN

    def membership_for(self, tenant_id: str) -> TenantMembership | None:
        for membership in self.memberships:
            if membership.tenant.id == tenant_id:
                return membership
        return None

    def can_access_tenant(self, tenant_id: str) -> bool:
        """Whether the user may select the given tenant."""
        return self.is_super_admin or self.membership_for(tenant_id) is not None

    def held_permissions(self, tenant_id: str) -> frozenset[PermissionKey]:
        """Permissions the user holds within a tenant (empty if not a member)."""
        membership = self.membership_for(tenant_id)
        if membership is None:
            return frozenset()
        return membership.permissions

    def switchable_tenants(self) -> list[TenantContext]:
        """Tenants offered by a tenant switcher, primary first.

        Remaining tenants are ordered by role priority (highest first), then
        by name.
        """
        ordered = sorted(
            self.memberships,
            key=lambda m: (not m.is_primary, -m.priority, m.tenant.name.lower()),
        )
        return [m.tenant for m in ordered]

    def primary_tenant(self) -> TenantContext | None:
        tenants = self.switchable_tenants()
        return tenants[0] if tenants else None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON-compatible shape of the durable record."""
        return {
            "id": self.user_id,
            "email": self.email,
            "roleLevel": self.role_level.value,
            "tenants": [
                {
                    "tenant": m.tenant.to_dict(),
                    "roleName": m.role_name,
                    "roleLevel": m.role_level.value,
                    "permissions": sorted(str(p) for p in m.permissions),
                    "isPrimary": m.is_primary,
                }
                for m in self.memberships
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Any) -> SessionUser:
        """Rebuild a session user from its durable record shape.

        Raises:
            ValueError: If the payload is malformed
        """
        if not isinstance(data, dict):
            raise ValueError("User record must be a JSON object")
        user_id = data.get("id")
        if not isinstance(user_id, str) or not user_id:
            raise ValueError("User record is missing 'id'")

        memberships = []
        for raw in data.get("tenants") or []:
            if not isinstance(raw, dict):
                raise ValueError("Tenant membership must be a JSON object")
            memberships.append(
                TenantMembership(
                    tenant=TenantContext.from_dict(raw.get("tenant")),
                    role_name=str(raw.get("roleName") or ""),
                    role_level=RoleLevel(raw.get("roleLevel") or RoleLevel.USER),
                    permissions=frozenset(
                        PermissionKey.parse(p) for p in raw.get("permissions") or []
                    ),
                    is_primary=bool(raw.get("isPrimary", False)),
                )
            )

        return cls(
            user_id=user_id,
            email=str(data.get("email") or ""),
            role_level=RoleLevel(data.get("roleLevel") or RoleLevel.USER),
            memberships=tuple(memberships),
        )
