"""Protocol for legacy assignment migration observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AssignmentMigrationProbe(Protocol):
    """Domain probe for the user_tenants to user_assignments migration."""

    def migration_completed(self, migrated: int, skipped: int) -> None:
        """Record that legacy memberships were copied into assignments."""
        ...

    def migration_failed(self, error: str) -> None:
        """Record that the migration was rolled back after an error."""
        ...

    def migration_rolled_back(self, deleted: int) -> None:
        """Record that migrated assignments were deleted."""
        ...

    def migration_verified(
        self, legacy_count: int, migrated_count: int, verified: bool
    ) -> None:
        """Record the outcome of a verification run."""
        ...

    def with_context(self, context: ObservationContext) -> AssignmentMigrationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAssignmentMigrationProbe:
    """Default implementation of AssignmentMigrationProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultAssignmentMigrationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAssignmentMigrationProbe(logger=self._logger, context=context)

    def migration_completed(self, migrated: int, skipped: int) -> None:
        self._logger.info(
            "assignment_migration_completed",
            migrated=migrated,
            skipped=skipped,
            **self._get_context_kwargs(),
        )

    def migration_failed(self, error: str) -> None:
        self._logger.error(
            "assignment_migration_failed",
            error=error,
            **self._get_context_kwargs(),
        )

    def migration_rolled_back(self, deleted: int) -> None:
        self._logger.info(
            "assignment_migration_rolled_back",
            deleted=deleted,
            **self._get_context_kwargs(),
        )

    def migration_verified(
        self, legacy_count: int, migrated_count: int, verified: bool
    ) -> None:
        log = self._logger.info if verified else self._logger.warning
        log(
            "assignment_migration_verified",
            legacy_count=legacy_count,
            migrated_count=migrated_count,
            verified=verified,
            **self._get_context_kwargs(),
        )
