"""Domain probe for menu repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of the menu store adapters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MenuRepositoryProbe(Protocol):
    """Domain probe for menu repository operations."""

    def menus_found(self, count: int, tenant_id: str | None, location: str | None) -> None:
        """Record that a menu query returned results."""
        ...

    def menus_deleted(self, count: int, tenant_id: str | None) -> None:
        """Record that menus were deleted in bulk."""
        ...

    def menus_created(self, created: int, skipped: int) -> None:
        """Record that a batch of menus was inserted."""
        ...

    def menu_store_unavailable(self, operation: str, error: Exception) -> None:
        """Record that the menu store could not be reached."""
        ...

    def with_context(self, context: ObservationContext) -> MenuRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMenuRepositoryProbe:
    """Default implementation of MenuRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultMenuRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultMenuRepositoryProbe(logger=self._logger, context=context)

    def menus_found(self, count: int, tenant_id: str | None, location: str | None) -> None:
        """Record that a menu query returned results."""
        self._logger.debug(
            "menus_found",
            count=count,
            menu_tenant_id=tenant_id,
            location=location,
            **self._get_context_kwargs(),
        )

    def menus_deleted(self, count: int, tenant_id: str | None) -> None:
        """Record that menus were deleted in bulk."""
        self._logger.info(
            "menus_deleted",
            count=count,
            menu_tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def menus_created(self, created: int, skipped: int) -> None:
        """Record that a batch of menus was inserted."""
        self._logger.info(
            "menus_created",
            created=created,
            skipped=skipped,
            **self._get_context_kwargs(),
        )

    def menu_store_unavailable(self, operation: str, error: Exception) -> None:
        """Record that the menu store could not be reached."""
        self._logger.error(
            "menu_store_unavailable",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )


class DurableStoreProbe(Protocol):
    """Domain probe for the file-backed durable client record."""

    def durable_record_unreadable(self, path: str, error: Exception) -> None:
        """Record that the backing file could not be read or decoded."""
        ...

    def with_context(self, context: ObservationContext) -> DurableStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDurableStoreProbe:
    """Default implementation of DurableStoreProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultDurableStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultDurableStoreProbe(logger=self._logger, context=context)

    def durable_record_unreadable(self, path: str, error: Exception) -> None:
        """Record that the backing file could not be read or decoded."""
        self._logger.warning(
            "durable_record_unreadable",
            path=path,
            error=str(error),
            **self._get_context_kwargs(),
        )
