"""Application services for the navigation bounded context."""

from navigation.application.services.menu_admin_service import MenuAdminService
from navigation.application.services.menu_resolution_service import (
    MenuResolutionService,
)

__all__ = [
    "MenuAdminService",
    "MenuResolutionService",
]
