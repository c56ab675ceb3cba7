"""Unit tests for the main FastAPI application."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from fastapi import status
from fastapi.testclient import TestClient


def test_health_reports_version():
    from infrastructure.version import __version__
    from main import app

    response = TestClient(app).get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok", "version": __version__}


def test_health_db_reports_unreachable_database():
    from main import app

    with patch("main.ping_database", AsyncMock(return_value=False)):
        response = TestClient(app).get("/health/db")

    assert response.json() == {"status": "unhealthy", "connected": False}


def test_health_db_reports_connected_database():
    from main import app

    with patch("main.ping_database", AsyncMock(return_value=True)):
        response = TestClient(app).get("/health/db")

    assert response.json() == {"status": "ok", "connected": True}


def test_routers_are_mounted():
    from main import app

    paths = {route.path for route in app.routes}

    assert "/iam/tenants/switchable" in paths
    assert "/navigation/menus/tree" in paths
    assert "/navigation/route-access" in paths


def test_lifespan_disposes_database_connections():
    from main import app

    with patch("main.close_database_connections", AsyncMock()) as close:
        with TestClient(app):
            pass

    close.assert_awaited_once()
