"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for database engine observability.

    Captures engine lifecycle events without exposing logging details.
    """

    def engine_created(self, role: str, host: str, database: str) -> None:
        """Record that a read or write engine was created."""
        ...

    def engine_disposed(self, role: str) -> None:
        """Record that an engine and its pool were disposed."""
        ...

    def database_unreachable(self, operation: str, error: Exception) -> None:
        """Record that a database operation failed at the transport level."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe:
    """Default implementation of ConnectionProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def engine_created(self, role: str, host: str, database: str) -> None:
        """Record that a read or write engine was created."""
        self._logger.info(
            "database_engine_created",
            role=role,
            host=host,
            database=database,
            **self._get_context_kwargs(),
        )

    def engine_disposed(self, role: str) -> None:
        """Record that an engine and its pool were disposed."""
        self._logger.info(
            "database_engine_disposed",
            role=role,
            **self._get_context_kwargs(),
        )

    def database_unreachable(self, operation: str, error: Exception) -> None:
        """Record that a database operation failed at the transport level."""
        self._logger.error(
            "database_unreachable",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )


class StartupProbe(Protocol):
    """Domain probe for application startup and shutdown."""

    def application_started(self, version: str) -> None:
        """Record that the application finished starting."""
        ...

    def application_stopped(self) -> None:
        """Record that the application shut down."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_started(self, version: str) -> None:
        """Record that the application finished starting."""
        self._logger.info(
            "application_started",
            version=version,
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        """Record that the application shut down."""
        self._logger.info(
            "application_stopped",
            **self._get_context_kwargs(),
        )
