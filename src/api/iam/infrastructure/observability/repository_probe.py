"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to tenant, user and assignment
repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class _StructlogProbe:
    """Shared structlog plumbing of the repository probes."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        ...

    def tenant_slug_not_found(self, slug: str) -> None:
        """Record that no tenant has the requested slug."""
        ...

    def tenants_listed(self, count: int) -> None:
        """Record that tenants were listed."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRepositoryProbe(_StructlogProbe):
    """Default implementation of TenantRepositoryProbe using structlog."""

    def with_context(self, context: ObservationContext) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        self._logger.debug(
            "tenant_retrieved",
            retrieved_tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_slug_not_found(self, slug: str) -> None:
        """Record that no tenant has the requested slug."""
        self._logger.debug(
            "tenant_slug_not_found",
            slug=slug,
            **self._get_context_kwargs(),
        )

    def tenants_listed(self, count: int) -> None:
        """Record that tenants were listed."""
        self._logger.debug(
            "tenants_listed",
            count=count,
            **self._get_context_kwargs(),
        )


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations."""

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        ...

    def session_user_loaded(self, user_id: str, membership_count: int) -> None:
        """Record that the session view of a user was built."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe(_StructlogProbe):
    """Default implementation of UserRepositoryProbe using structlog."""

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        self._logger.debug(
            "user_not_found",
            requested_user_id=user_id,
            **self._get_context_kwargs(),
        )

    def session_user_loaded(self, user_id: str, membership_count: int) -> None:
        """Record that the session view of a user was built."""
        self._logger.debug(
            "session_user_loaded",
            loaded_user_id=user_id,
            membership_count=membership_count,
            **self._get_context_kwargs(),
        )


class AssignmentRepositoryProbe(Protocol):
    """Domain probe for assignment repository operations."""

    def assignment_added(self, assignment_id: str, priority: int) -> None:
        """Record that an assignment was persisted."""
        ...

    def migrated_assignments_deleted(self, count: int) -> None:
        """Record that migrated assignments were removed."""
        ...

    def with_context(self, context: ObservationContext) -> AssignmentRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAssignmentRepositoryProbe(_StructlogProbe):
    """Default implementation of AssignmentRepositoryProbe using structlog."""

    def with_context(
        self, context: ObservationContext
    ) -> DefaultAssignmentRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultAssignmentRepositoryProbe(logger=self._logger, context=context)

    def assignment_added(self, assignment_id: str, priority: int) -> None:
        """Record that an assignment was persisted."""
        self._logger.debug(
            "assignment_added",
            assignment_id=assignment_id,
            priority=priority,
            **self._get_context_kwargs(),
        )

    def migrated_assignments_deleted(self, count: int) -> None:
        """Record that migrated assignments were removed."""
        self._logger.info(
            "migrated_assignments_deleted",
            count=count,
            **self._get_context_kwargs(),
        )
