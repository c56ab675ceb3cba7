"""Domain probe for tenant context resolution.

Following Domain-Oriented Observability patterns, this probe captures
where the current tenant came from, when it changed, and when a persisted
record had to be thrown away.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextResolverProbe(Protocol):
    """Domain probe for the tenant context resolver."""

    def tenant_resolved(self, current_tenant_id: str, source: str) -> None:
        """Record that the current tenant was resolved from memory or durable storage."""
        ...

    def no_tenant_resolved(self) -> None:
        """Record that no current tenant is known."""
        ...

    def malformed_record_discarded(self, key: str, error: Exception) -> None:
        """Record that an unparseable durable record was removed."""
        ...

    def tenant_selected(self, current_tenant_id: str, slug: str) -> None:
        """Record that a tenant was selected and persisted."""
        ...

    def tenant_cleared(self) -> None:
        """Record that the tenant and session records were cleared."""
        ...

    def tenant_switch_denied(self, user_id: str, requested_tenant_id: str) -> None:
        """Record that a user tried to select a tenant they cannot access."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextResolverProbe:
    """Default implementation of TenantContextResolverProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantContextResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextResolverProbe(logger=self._logger, context=context)

    def tenant_resolved(self, current_tenant_id: str, source: str) -> None:
        """Record that the current tenant was resolved from memory or durable storage."""
        self._logger.debug(
            "tenant_context_resolved",
            current_tenant_id=current_tenant_id,
            source=source,
            **self._get_context_kwargs(),
        )

    def no_tenant_resolved(self) -> None:
        """Record that no current tenant is known."""
        self._logger.debug(
            "tenant_context_absent",
            **self._get_context_kwargs(),
        )

    def malformed_record_discarded(self, key: str, error: Exception) -> None:
        """Record that an unparseable durable record was removed."""
        self._logger.warning(
            "malformed_durable_record_discarded",
            key=key,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def tenant_selected(self, current_tenant_id: str, slug: str) -> None:
        """Record that a tenant was selected and persisted."""
        self._logger.info(
            "tenant_selected",
            current_tenant_id=current_tenant_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def tenant_cleared(self) -> None:
        """Record that the tenant and session records were cleared."""
        self._logger.info(
            "tenant_context_cleared",
            **self._get_context_kwargs(),
        )

    def tenant_switch_denied(self, user_id: str, requested_tenant_id: str) -> None:
        """Record that a user tried to select a tenant they cannot access."""
        self._logger.warning(
            "tenant_switch_denied",
            acting_user_id=user_id,
            requested_tenant_id=requested_tenant_id,
            **self._get_context_kwargs(),
        )
