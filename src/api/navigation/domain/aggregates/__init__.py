"""Aggregates for the navigation context."""

from navigation.domain.aggregates.menu_entry import EXTERNAL_LINK_TARGET, MenuEntry

__all__ = [
    "EXTERNAL_LINK_TARGET",
    "MenuEntry",
]
