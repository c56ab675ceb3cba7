"""Route access routes and models."""

from navigation.presentation.route_access.routes import router

__all__ = ["router"]
