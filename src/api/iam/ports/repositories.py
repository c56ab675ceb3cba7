"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for retrieving aggregates and the
session view of a user. Implementations live in the infrastructure layer.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import LegacyMembership, Tenant, User, UserAssignment
from iam.domain.value_objects import TenantId, UserId
from shared_kernel.auth.session import SessionUser


@runtime_checkable
class ITenantRepository(Protocol):
    """Repository for Tenant aggregates."""

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a tenant by its ID.

        Returns:
            The Tenant aggregate, or None if not found
        """
        ...

    async def get_by_slug(self, slug: str) -> Tenant | None:
        """Retrieve a tenant by its unique slug.

        Returns:
            The Tenant aggregate, or None if not found
        """
        ...

    async def list_all(self, active_only: bool = True) -> list[Tenant]:
        """List tenants ordered by name.

        Args:
            active_only: Exclude inactive tenants
        """
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregates and their session view."""

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by ID, or None if not found."""
        ...

    async def get_session_user(self, user_id: UserId) -> SessionUser | None:
        """Build the session view of a user.

        The session view lists the tenants the user holds an effective
        assignment in, with the role and permissions of each assignment.

        Returns:
            SessionUser, or None if the user does not exist or is inactive
        """
        ...


@runtime_checkable
class IAssignmentRepository(Protocol):
    """Repository for user assignments and the legacy memberships they replace."""

    async def list_legacy_memberships(self) -> list[LegacyMembership]:
        """All rows of the legacy membership table with their role levels."""
        ...

    async def migrated_legacy_ids(self) -> set[str]:
        """IDs of legacy memberships that already have a migrated assignment."""
        ...

    async def add(self, assignment: UserAssignment) -> None:
        """Persist a new assignment."""
        ...

    async def delete_migrated(self) -> int:
        """Delete every assignment created by the legacy migration.

        Returns:
            Number of deleted assignments
        """
        ...

    async def count_migrated(self) -> int:
        """Count assignments created by the legacy migration."""
        ...

    async def count_legacy(self) -> int:
        """Count rows of the legacy membership table."""
        ...
