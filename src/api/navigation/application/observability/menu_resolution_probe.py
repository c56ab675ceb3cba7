"""Domain probe for menu resolution.

Following Domain-Oriented Observability patterns, this probe captures
menu resolution results, fail-soft degradation and hierarchy repairs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MenuResolutionProbe(Protocol):
    """Domain probe for menu resolution operations."""

    def menus_resolved(
        self, menu_tenant_id: str | None, location: str, count: int
    ) -> None:
        """Record that menus were resolved for a tenant and location."""
        ...

    def menus_degraded_to_empty(
        self, menu_tenant_id: str | None, location: str, error: Exception
    ) -> None:
        """Record that an unreachable store produced an empty menu set."""
        ...

    def menu_promoted_to_top_level(self, menu_id: str, reason: str) -> None:
        """Record that an entry was promoted because its parent is unusable."""
        ...

    def stale_resolution_discarded(
        self, responding_tenant_id: str | None, current_tenant_id: str | None
    ) -> None:
        """Record that a superseded resolution result was ignored."""
        ...

    def with_context(self, context: ObservationContext) -> MenuResolutionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMenuResolutionProbe:
    """Default implementation of MenuResolutionProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultMenuResolutionProbe:
        """Create a new probe with observation context bound."""
        return DefaultMenuResolutionProbe(logger=self._logger, context=context)

    def menus_resolved(
        self, menu_tenant_id: str | None, location: str, count: int
    ) -> None:
        """Record that menus were resolved for a tenant and location."""
        self._logger.debug(
            "menus_resolved",
            menu_tenant_id=menu_tenant_id,
            location=location,
            count=count,
            **self._get_context_kwargs(),
        )

    def menus_degraded_to_empty(
        self, menu_tenant_id: str | None, location: str, error: Exception
    ) -> None:
        """Record that an unreachable store produced an empty menu set."""
        self._logger.warning(
            "menus_degraded_to_empty",
            menu_tenant_id=menu_tenant_id,
            location=location,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def menu_promoted_to_top_level(self, menu_id: str, reason: str) -> None:
        """Record that an entry was promoted because its parent is unusable."""
        self._logger.info(
            "menu_promoted_to_top_level",
            menu_id=menu_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def stale_resolution_discarded(
        self, responding_tenant_id: str | None, current_tenant_id: str | None
    ) -> None:
        """Record that a superseded resolution result was ignored."""
        self._logger.debug(
            "stale_menu_resolution_discarded",
            responding_tenant_id=responding_tenant_id,
            current_tenant_id=current_tenant_id,
            **self._get_context_kwargs(),
        )
