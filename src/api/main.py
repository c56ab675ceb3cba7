"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from iam.presentation import router as iam_router
from infrastructure.database.dependencies import (
    close_database_connections,
    ping_database,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from navigation.presentation import router as navigation_router


@asynccontextmanager
async def wayfinder_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - structlog configuration
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()
    probe.application_started(__version__)

    yield

    await close_database_connections()
    probe.application_stopped()


app = FastAPI(
    title="Wayfinder API",
    description="Tenant-scoped menu resolution and route guarding",
    version=__version__,
    lifespan=wayfinder_lifespan,
)

app.include_router(iam_router)
app.include_router(navigation_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/health/db")
async def health_db() -> dict:
    """Check that the database is reachable."""
    connected = await ping_database()
    return {
        "status": "ok" if connected else "unhealthy",
        "connected": connected,
    }
