"""Infrastructure adapters for the navigation bounded context."""
