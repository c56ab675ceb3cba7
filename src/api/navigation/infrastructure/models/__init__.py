"""SQLAlchemy ORM models for the navigation bounded context."""

from navigation.infrastructure.models.menu import MenuModel, MenuPermissionModel

__all__ = [
    "MenuModel",
    "MenuPermissionModel",
]
