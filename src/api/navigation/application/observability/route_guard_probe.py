"""Domain probe for route guarding.

Following Domain-Oriented Observability patterns, this probe captures
route access decisions and discarded stale checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RouteGuardProbe(Protocol):
    """Domain probe for route guard decisions."""

    def route_allowed(self, path: str, guard_tenant_id: str | None) -> None:
        """Record that a route was allowed."""
        ...

    def route_redirected(
        self, path: str, redirect_to: str, reason: str, guard_tenant_id: str | None
    ) -> None:
        """Record that a route was redirected to a fallback."""
        ...

    def access_indeterminate(self, path: str, reason: str) -> None:
        """Record that access could not be determined (store or resolution failure)."""
        ...

    def stale_check_discarded(self, path: str, generation: int) -> None:
        """Record that a superseded check finished and was ignored."""
        ...

    def recheck_scheduled(self, path: str, guard_tenant_id: str | None) -> None:
        """Record that a tenant switch scheduled a fresh check."""
        ...

    def with_context(self, context: ObservationContext) -> RouteGuardProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRouteGuardProbe:
    """Default implementation of RouteGuardProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRouteGuardProbe:
        """Create a new probe with observation context bound."""
        return DefaultRouteGuardProbe(logger=self._logger, context=context)

    def route_allowed(self, path: str, guard_tenant_id: str | None) -> None:
        """Record that a route was allowed."""
        self._logger.debug(
            "route_allowed",
            path=path,
            guard_tenant_id=guard_tenant_id,
            **self._get_context_kwargs(),
        )

    def route_redirected(
        self, path: str, redirect_to: str, reason: str, guard_tenant_id: str | None
    ) -> None:
        """Record that a route was redirected to a fallback."""
        self._logger.info(
            "route_redirected",
            path=path,
            redirect_to=redirect_to,
            reason=reason,
            guard_tenant_id=guard_tenant_id,
            **self._get_context_kwargs(),
        )

    def access_indeterminate(self, path: str, reason: str) -> None:
        """Record that access could not be determined (store or resolution failure)."""
        self._logger.warning(
            "route_access_indeterminate",
            path=path,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def stale_check_discarded(self, path: str, generation: int) -> None:
        """Record that a superseded check finished and was ignored."""
        self._logger.debug(
            "stale_route_check_discarded",
            path=path,
            generation=generation,
            **self._get_context_kwargs(),
        )

    def recheck_scheduled(self, path: str, guard_tenant_id: str | None) -> None:
        """Record that a tenant switch scheduled a fresh check."""
        self._logger.debug(
            "route_recheck_scheduled",
            path=path,
            guard_tenant_id=guard_tenant_id,
            **self._get_context_kwargs(),
        )
