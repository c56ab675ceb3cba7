"""Domain probe for menu administration.

Following Domain-Oriented Observability patterns, this probe captures bulk
menu operations performed by administrators and scripts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MenuAdminProbe(Protocol):
    """Domain probe for menu administration operations."""

    def menus_cleared(self, menu_tenant_id: str | None, count: int) -> None:
        """Record that the menus of a tenant (or all menus) were deleted."""
        ...

    def menus_seeded(self, requested: int, created: int) -> None:
        """Record the outcome of a batch seed."""
        ...

    def with_context(self, context: ObservationContext) -> MenuAdminProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMenuAdminProbe:
    """Default implementation of MenuAdminProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultMenuAdminProbe:
        """Create a new probe with observation context bound."""
        return DefaultMenuAdminProbe(logger=self._logger, context=context)

    def menus_cleared(self, menu_tenant_id: str | None, count: int) -> None:
        """Record that the menus of a tenant (or all menus) were deleted."""
        self._logger.info(
            "menus_cleared",
            menu_tenant_id=menu_tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def menus_seeded(self, requested: int, created: int) -> None:
        """Record the outcome of a batch seed."""
        self._logger.info(
            "menus_seeded",
            requested=requested,
            created=created,
            skipped=requested - created,
            **self._get_context_kwargs(),
        )
