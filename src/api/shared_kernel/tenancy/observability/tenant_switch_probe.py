"""Domain probe for tenant switch notifications.

Following Domain-Oriented Observability patterns, this probe captures
tenant switch publications and observer failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantSwitchProbe(Protocol):
    """Domain probe for the tenant switch channel."""

    def tenant_switch_published(
        self, tenant_id: str | None, subscriber_count: int
    ) -> None:
        """Record that a tenant switch was published."""
        ...

    def observer_failed(self, tenant_id: str | None, error: Exception) -> None:
        """Record that an observer raised while handling a switch."""
        ...

    def with_context(self, context: ObservationContext) -> TenantSwitchProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantSwitchProbe:
    """Default implementation of TenantSwitchProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantSwitchProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantSwitchProbe(logger=self._logger, context=context)

    def tenant_switch_published(
        self, tenant_id: str | None, subscriber_count: int
    ) -> None:
        """Record that a tenant switch was published."""
        self._logger.info(
            "tenant_switch_published",
            new_tenant_id=tenant_id,
            subscriber_count=subscriber_count,
            **self._get_context_kwargs(),
        )

    def observer_failed(self, tenant_id: str | None, error: Exception) -> None:
        """Record that an observer raised while handling a switch."""
        self._logger.error(
            "tenant_switch_observer_failed",
            new_tenant_id=tenant_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
