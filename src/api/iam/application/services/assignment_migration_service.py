"""Migration of legacy user_tenants rows into user_assignments.

Each legacy membership becomes one assignment whose priority follows the
role level of the membership. Migrated assignments carry a note naming the
legacy row, which makes the migration idempotent and reversible.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AssignmentMigrationProbe,
    DefaultAssignmentMigrationProbe,
)
from iam.domain.aggregates import UserAssignment
from iam.ports.exceptions import MigrationError
from iam.ports.repositories import IAssignmentRepository


@dataclass(frozen=True)
class MigrationReport:
    """Outcome of a migration run."""

    legacy_count: int
    migrated: int
    skipped: int
    dry_run: bool = False


@dataclass(frozen=True)
class VerificationReport:
    """Row counts compared by a verification run."""

    legacy_count: int
    migrated_count: int

    @property
    def verified(self) -> bool:
        """Every legacy row has exactly one migrated assignment."""
        return self.legacy_count > 0 and self.migrated_count == self.legacy_count


class AssignmentMigrationService:
    """Copies, removes and checks migrated assignments."""

    def __init__(
        self,
        assignment_repository: IAssignmentRepository,
        session: AsyncSession,
        probe: AssignmentMigrationProbe | None = None,
    ):
        self._assignment_repository = assignment_repository
        self._session = session
        self._probe = probe or DefaultAssignmentMigrationProbe()

    async def migrate(self, dry_run: bool = False) -> MigrationReport:
        """Copy every legacy membership that has not been migrated yet.

        Runs in a single transaction: on failure nothing is written.

        Args:
            dry_run: Count what would be migrated without writing

        Raises:
            MigrationError: If reading or writing fails
        """
        try:
            async with self._session.begin():
                legacy = await self._assignment_repository.list_legacy_memberships()
                already_migrated = (
                    await self._assignment_repository.migrated_legacy_ids()
                )

                pending = [m for m in legacy if m.id not in already_migrated]
                if not dry_run:
                    for membership in pending:
                        await self._assignment_repository.add(
                            UserAssignment.from_legacy(membership)
                        )
        except Exception as e:
            self._probe.migration_failed(str(e))
            raise MigrationError(f"Assignment migration failed: {e}") from e

        report = MigrationReport(
            legacy_count=len(legacy),
            migrated=len(pending),
            skipped=len(legacy) - len(pending),
            dry_run=dry_run,
        )
        if not dry_run:
            self._probe.migration_completed(report.migrated, report.skipped)
        return report

    async def rollback(self) -> int:
        """Delete every migrated assignment.

        Returns:
            Number of deleted assignments

        Raises:
            MigrationError: If the delete fails
        """
        try:
            async with self._session.begin():
                deleted = await self._assignment_repository.delete_migrated()
        except Exception as e:
            self._probe.migration_failed(str(e))
            raise MigrationError(f"Assignment rollback failed: {e}") from e

        self._probe.migration_rolled_back(deleted)
        return deleted

    async def verify(self) -> VerificationReport:
        """Compare legacy and migrated row counts."""
        async with self._session.begin():
            report = VerificationReport(
                legacy_count=await self._assignment_repository.count_legacy(),
                migrated_count=await self._assignment_repository.count_migrated(),
            )

        self._probe.migration_verified(
            report.legacy_count, report.migrated_count, report.verified
        )
        return report
