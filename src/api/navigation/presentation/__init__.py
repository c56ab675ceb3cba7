"""Navigation presentation layer.

Menus and route access each get their own router under /navigation.
"""

from __future__ import annotations

from fastapi import APIRouter

from navigation.presentation import menus, route_access

router = APIRouter(
    prefix="/navigation",
    tags=["navigation"],
)

router.include_router(menus.router)
router.include_router(route_access.router)

__all__ = ["router"]
