"""PostgreSQL implementation of IAssignmentRepository.

Migrated assignments are recognised by the marker their notes start with.
"""

from __future__ import annotations

import re

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from iam.domain.aggregates import LegacyMembership, UserAssignment
from iam.domain.value_objects import (
    MIGRATION_NOTE_MARKER,
    AssignmentStatus,
    RoleId,
    TenantId,
    UserId,
)
from iam.infrastructure.models import UserAssignmentModel, UserTenantModel
from iam.infrastructure.observability import (
    AssignmentRepositoryProbe,
    DefaultAssignmentRepositoryProbe,
)
from iam.ports.repositories import IAssignmentRepository

_MIGRATED_FROM = re.compile(re.escape(MIGRATION_NOTE_MARKER) + r" \(([^)]+)\)")


def _status(value: str | None) -> AssignmentStatus:
    try:
        return AssignmentStatus(value or AssignmentStatus.ACTIVE)
    except ValueError:
        return AssignmentStatus.INACTIVE


class AssignmentRepository(IAssignmentRepository):
    """Repository for user assignments and legacy memberships."""

    def __init__(
        self,
        session: AsyncSession,
        probe: AssignmentRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession owned by the calling service
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultAssignmentRepositoryProbe()

    def _migrated_clause(self):
        return UserAssignmentModel.notes.contains(MIGRATION_NOTE_MARKER)

    async def list_legacy_memberships(self) -> list[LegacyMembership]:
        """All legacy memberships with the level of their role."""
        stmt = (
            select(UserTenantModel)
            .options(selectinload(UserTenantModel.role))
            .order_by(UserTenantModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            LegacyMembership(
                id=model.id,
                user_id=UserId(value=model.user_id),
                tenant_id=TenantId(value=model.tenant_id),
                role_id=RoleId(value=model.role_id),
                role_level=model.role.level if model.role is not None else None,
                status=_status(model.status),
                is_primary=model.is_primary,
                assigned_by=model.assigned_by,
                assigned_at=model.assigned_at,
                expires_at=model.expires_at,
            )
            for model in result.scalars().all()
        ]

    async def migrated_legacy_ids(self) -> set[str]:
        """IDs of legacy memberships named in migrated assignment notes."""
        stmt = select(UserAssignmentModel.notes).where(self._migrated_clause())
        result = await self._session.execute(stmt)
        ids: set[str] = set()
        for notes in result.scalars().all():
            match = _MIGRATED_FROM.search(notes or "")
            if match:
                ids.add(match.group(1))
        return ids

    async def add(self, assignment: UserAssignment) -> None:
        """Persist a new assignment (flushed, not committed)."""
        self._session.add(
            UserAssignmentModel(
                id=assignment.id.value,
                user_id=assignment.user_id.value,
                tenant_id=assignment.tenant_id.value,
                role_id=assignment.role_id.value,
                status=assignment.status.value,
                is_primary=assignment.is_primary,
                priority=assignment.priority,
                assigned_by=assignment.assigned_by,
                assigned_at=assignment.assigned_at,
                expires_at=assignment.expires_at,
                notes=assignment.notes,
            )
        )
        await self._session.flush()
        self._probe.assignment_added(assignment.id.value, assignment.priority)

    async def delete_migrated(self) -> int:
        """Delete every assignment created by the legacy migration."""
        stmt = delete(UserAssignmentModel).where(self._migrated_clause())
        result = await self._session.execute(
            stmt, execution_options={"synchronize_session": False}
        )
        deleted = int(result.rowcount or 0)
        self._probe.migrated_assignments_deleted(deleted)
        return deleted

    async def count_migrated(self) -> int:
        """Count assignments created by the legacy migration."""
        stmt = (
            select(func.count())
            .select_from(UserAssignmentModel)
            .where(self._migrated_clause())
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def count_legacy(self) -> int:
        """Count rows of the legacy membership table."""
        stmt = select(func.count()).select_from(UserTenantModel)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())
