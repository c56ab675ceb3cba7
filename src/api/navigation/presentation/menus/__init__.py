"""Menu routes and models."""

from navigation.presentation.menus.routes import router

__all__ = ["router"]
