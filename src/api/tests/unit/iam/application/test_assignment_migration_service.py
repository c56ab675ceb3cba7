"""Unit tests for AssignmentMigrationService."""

from unittest.mock import create_autospec

import pytest

from iam.application.observability import AssignmentMigrationProbe
from iam.application.services import AssignmentMigrationService, VerificationReport
from iam.domain.aggregates import LegacyMembership
from iam.domain.value_objects import MIGRATION_NOTE_MARKER, RoleId, TenantId, UserId
from iam.ports.exceptions import MigrationError
from iam.ports.repositories import IAssignmentRepository


@pytest.fixture
def mock_repository():
    return create_autospec(IAssignmentRepository, instance=True)


@pytest.fixture
def mock_probe():
    return create_autospec(AssignmentMigrationProbe, instance=True)


@pytest.fixture
def service(mock_repository, mock_session, mock_probe):
    return AssignmentMigrationService(
        assignment_repository=mock_repository,
        session=mock_session,
        probe=mock_probe,
    )


def _legacy(legacy_id: str, role_level: str | None = "ADMIN") -> LegacyMembership:
    return LegacyMembership(
        id=legacy_id,
        user_id=UserId(value="user-1"),
        tenant_id=TenantId(value="tenant-acme"),
        role_id=RoleId(value="role-1"),
        role_level=role_level,
        is_primary=True,
    )


class TestMigrate:
    @pytest.mark.asyncio
    async def test_copies_pending_memberships(
        self, service, mock_repository, mock_probe
    ):
        mock_repository.list_legacy_memberships.return_value = [
            _legacy("ut-1", "ADMIN"),
            _legacy("ut-2", None),
        ]
        mock_repository.migrated_legacy_ids.return_value = set()

        report = await service.migrate()

        assert (report.legacy_count, report.migrated, report.skipped) == (2, 2, 0)
        added = [c.args[0] for c in mock_repository.add.call_args_list]
        assert [a.priority for a in added] == [8, 4]
        assert added[0].is_primary is True
        assert added[0].notes == f"{MIGRATION_NOTE_MARKER} (ut-1)"
        mock_probe.migration_completed.assert_called_once_with(2, 0)

    @pytest.mark.asyncio
    async def test_skips_already_migrated(self, service, mock_repository):
        mock_repository.list_legacy_memberships.return_value = [
            _legacy("ut-1"),
            _legacy("ut-2"),
        ]
        mock_repository.migrated_legacy_ids.return_value = {"ut-1"}

        report = await service.migrate()

        assert (report.migrated, report.skipped) == (1, 1)
        assert mock_repository.add.call_count == 1

    @pytest.mark.asyncio
    async def test_dry_run_writes_nothing(self, service, mock_repository, mock_probe):
        mock_repository.list_legacy_memberships.return_value = [_legacy("ut-1")]
        mock_repository.migrated_legacy_ids.return_value = set()

        report = await service.migrate(dry_run=True)

        assert report.dry_run is True
        assert report.migrated == 1
        mock_repository.add.assert_not_called()
        mock_probe.migration_completed.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_becomes_migration_error(
        self, service, mock_repository, mock_probe
    ):
        mock_repository.list_legacy_memberships.side_effect = RuntimeError("db down")

        with pytest.raises(MigrationError):
            await service.migrate()

        mock_probe.migration_failed.assert_called_once()


class TestRollback:
    @pytest.mark.asyncio
    async def test_deletes_migrated(self, service, mock_repository, mock_probe):
        mock_repository.delete_migrated.return_value = 3

        assert await service.rollback() == 3
        mock_probe.migration_rolled_back.assert_called_once_with(3)

    @pytest.mark.asyncio
    async def test_failure_becomes_migration_error(self, service, mock_repository):
        mock_repository.delete_migrated.side_effect = RuntimeError("locked")

        with pytest.raises(MigrationError):
            await service.rollback()


class TestVerify:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "legacy,migrated,verified",
        [(3, 3, True), (3, 2, False), (0, 0, False), (2, 4, False)],
    )
    async def test_compares_counts(
        self, service, mock_repository, legacy, migrated, verified
    ):
        mock_repository.count_legacy.return_value = legacy
        mock_repository.count_migrated.return_value = migrated

        report = await service.verify()

        assert report == VerificationReport(legacy_count=legacy, migrated_count=migrated)
        assert report.verified is verified
