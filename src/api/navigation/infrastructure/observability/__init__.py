"""Observability for navigation infrastructure adapters."""

from navigation.infrastructure.observability.repository_probe import (
    DefaultDurableStoreProbe,
    DefaultMenuRepositoryProbe,
    DurableStoreProbe,
    MenuRepositoryProbe,
)

__all__ = [
    "DefaultDurableStoreProbe",
    "DefaultMenuRepositoryProbe",
    "DurableStoreProbe",
    "MenuRepositoryProbe",
]
