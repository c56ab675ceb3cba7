"""Database dependency injection for FastAPI.

Provides async session factories for read and write operations. Engines are
created lazily, once per process, and disposed on application shutdown.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_read_engine, create_write_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

_probe = DefaultConnectionProbe()

_write_engine: AsyncEngine | None = None
_read_engine: AsyncEngine | None = None

_write_sessionmaker: async_sessionmaker[AsyncSession] | None = None
_read_sessionmaker: async_sessionmaker[AsyncSession] | None = None

_engine_lock = threading.Lock()


def get_write_engine() -> AsyncEngine:
    """Get the write database engine (singleton).

    Uses double-check locking for thread-safe initialization and creates
    the matching sessionmaker alongside the engine.
    """
    global _write_engine, _write_sessionmaker
    if _write_engine is None:
        with _engine_lock:
            if _write_engine is None:
                settings = get_database_settings()
                _write_engine = create_write_engine(settings)
                _write_sessionmaker = async_sessionmaker(
                    _write_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created("write", settings.host, settings.database)
    return _write_engine


def get_read_engine() -> AsyncEngine:
    """Get the read database engine (singleton)."""
    global _read_engine, _read_sessionmaker
    if _read_engine is None:
        with _engine_lock:
            if _read_engine is None:
                settings = get_database_settings()
                _read_engine = create_read_engine(settings)
                _read_sessionmaker = async_sessionmaker(
                    _read_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created("read", settings.host, settings.database)
    return _read_engine


def get_write_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Sessionmaker bound to the write engine, for scripts outside FastAPI."""
    get_write_engine()
    assert _write_sessionmaker is not None
    return _write_sessionmaker


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a write session for mutations (FastAPI dependency).

    The session does NOT auto-commit. Services own their transactions with
    `async with session.begin()`.

    Yields:
        AsyncSession for database operations
    """
    async with get_write_sessionmaker()() as session:
        yield session


async def get_read_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for queries (FastAPI dependency).

    Yields:
        AsyncSession bound to the read engine
    """
    get_read_engine()
    assert _read_sessionmaker is not None

    async with _read_sessionmaker() as session:
        yield session


async def ping_database() -> bool:
    """Check that the read engine can reach the database."""
    try:
        async with get_read_engine().connect() as connection:
            await connection.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        _probe.database_unreachable("ping", e)
        return False
    return True


async def close_database_connections() -> None:
    """Dispose both engines and reset the sessionmakers.

    Called on application shutdown; a later call to a getter re-creates
    the engine.
    """
    global _write_engine, _read_engine, _write_sessionmaker, _read_sessionmaker

    if _write_engine is not None:
        await _write_engine.dispose()
        _probe.engine_disposed("write")
        _write_engine = None
        _write_sessionmaker = None

    if _read_engine is not None:
        await _read_engine.dispose()
        _probe.engine_disposed("read")
        _read_engine = None
        _read_sessionmaker = None
