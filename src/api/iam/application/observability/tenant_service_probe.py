"""Protocol for tenant application service observability.

Defines the interface for domain probes that capture application-level
domain events for tenant service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantServiceProbe(Protocol):
    """Domain probe for tenant application service operations."""

    def switchable_tenants_listed(self, requested_user_id: str, count: int) -> None:
        """Record that the switchable tenants of a user were listed."""
        ...

    def tenant_slug_resolved(self, retrieved_tenant_id: str, slug: str) -> None:
        """Record that a slug was resolved to a tenant."""
        ...

    def tenant_not_found(self, slug: str) -> None:
        """Record that no tenant matched a slug."""
        ...

    def unknown_user(self, requested_user_id: str) -> None:
        """Record that the acting user does not exist or is inactive."""
        ...

    def with_context(self, context: ObservationContext) -> TenantServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantServiceProbe:
    """Default implementation of TenantServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantServiceProbe(logger=self._logger, context=context)

    def switchable_tenants_listed(self, requested_user_id: str, count: int) -> None:
        """Record that the switchable tenants of a user were listed."""
        self._logger.debug(
            "switchable_tenants_listed",
            requested_user_id=requested_user_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def tenant_slug_resolved(self, retrieved_tenant_id: str, slug: str) -> None:
        """Record that a slug was resolved to a tenant."""
        self._logger.debug(
            "tenant_slug_resolved",
            retrieved_tenant_id=retrieved_tenant_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, slug: str) -> None:
        """Record that no tenant matched a slug."""
        self._logger.debug(
            "tenant_not_found",
            slug=slug,
            **self._get_context_kwargs(),
        )

    def unknown_user(self, requested_user_id: str) -> None:
        """Record that the acting user does not exist or is inactive."""
        self._logger.warning(
            "unknown_user",
            requested_user_id=requested_user_id,
            **self._get_context_kwargs(),
        )
