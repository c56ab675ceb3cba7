"""User assignment aggregate and the legacy membership it replaces."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from iam.domain.value_objects import (
    MIGRATION_NOTE_MARKER,
    AssignmentId,
    AssignmentStatus,
    RoleId,
    TenantId,
    UserId,
)
from shared_kernel.authorization.types import RoleLevel, priority_for


@dataclass(frozen=True)
class LegacyMembership:
    """A row of the legacy user_tenants table."""

    id: str
    user_id: UserId
    tenant_id: TenantId
    role_id: RoleId
    role_level: RoleLevel | str | None
    status: AssignmentStatus = AssignmentStatus.ACTIVE
    is_primary: bool = False
    assigned_by: str | None = None
    assigned_at: datetime | None = None
    expires_at: datetime | None = None


@dataclass
class UserAssignment:
    """A user's role assignment within a tenant.

    Assignments carry a priority derived from the role level; when a user
    holds several assignments the highest priority one is preferred.
    """

    id: AssignmentId
    user_id: UserId
    tenant_id: TenantId
    role_id: RoleId
    priority: int
    status: AssignmentStatus = AssignmentStatus.ACTIVE
    is_primary: bool = False
    assigned_by: str | None = None
    assigned_at: datetime | None = None
    expires_at: datetime | None = None
    notes: str | None = None

    def is_effective(self, now: datetime | None = None) -> bool:
        """Active and not expired."""
        if self.status is not AssignmentStatus.ACTIVE:
            return False
        if self.expires_at is None:
            return True
        return self.expires_at > (now or datetime.now(UTC))

    @classmethod
    def from_legacy(cls, membership: LegacyMembership) -> UserAssignment:
        """Copy a legacy membership into a new assignment.

        The priority follows the role level mapping; the note records which
        legacy row the assignment came from so a rollback can find it.
        """
        return cls(
            id=AssignmentId.generate(),
            user_id=membership.user_id,
            tenant_id=membership.tenant_id,
            role_id=membership.role_id,
            priority=priority_for(membership.role_level),
            status=membership.status,
            is_primary=membership.is_primary,
            assigned_by=membership.assigned_by,
            assigned_at=membership.assigned_at or datetime.now(UTC),
            expires_at=membership.expires_at,
            notes=migration_note(membership.id),
        )


def migration_note(legacy_id: str) -> str:
    return f"{MIGRATION_NOTE_MARKER} ({legacy_id})"
