"""Database infrastructure - async engines, sessions and the ORM base."""
