"""Hierarchical view of resolved menu entries.

Entries are kept in an arena indexed by ID and child lists are computed on
demand, so a deleted or filtered-out parent never leaves dangling children.
An entry whose parent is not part of the arena (missing, inactive or
filtered out) is promoted to the top level instead of being dropped. Entries
caught in a parent cycle are promoted the same way.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum

from navigation.domain.aggregates import MenuEntry
from navigation.domain.value_objects import MenuId


class PromotionReason(StrEnum):
    """Why an entry with a declared parent ended up at the top level."""

    MISSING_PARENT = "missing_parent"
    CYCLE = "cycle"


@dataclass(frozen=True)
class MenuNode:
    """A resolved menu entry with its resolved path and children."""

    entry: MenuEntry
    path: str | None
    children: tuple[MenuNode, ...] = field(default=())

    @property
    def id(self) -> MenuId:
        return self.entry.id

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def order(self) -> int:
        return self.entry.order

    def walk(self) -> Iterator[MenuNode]:
        """Yield this node and its descendants depth-first in display order."""
        yield self
        for child in self.children:
            yield from child.walk()


PromotionCallback = Callable[[MenuEntry, PromotionReason], None]


def _in_cycle(entry_id: MenuId, arena: dict[MenuId, MenuEntry]) -> bool:
    visited: set[MenuId] = set()
    current = arena[entry_id].parent_id
    while current is not None and current in arena:
        if current == entry_id:
            return True
        if current in visited:
            # Cycle further up that does not include this entry
            return False
        visited.add(current)
        current = arena[current].parent_id
    return False


def build_menu_tree(
    entries: Iterable[MenuEntry],
    tenant_slug: str | None = None,
    on_promoted: PromotionCallback | None = None,
) -> list[MenuNode]:
    """Nest entries under their parents and order every level.

    Args:
        entries: Eligible entries (already filtered for scope and visibility)
        tenant_slug: Slug substituted into tenant placeholders of paths
        on_promoted: Called for each entry promoted to the top level

    Returns:
        Top-level nodes, each level sorted by (order, created_at, id)
    """
    arena: dict[MenuId, MenuEntry] = {}
    for entry in entries:
        arena.setdefault(entry.id, entry)

    roots: list[MenuEntry] = []
    children_of: dict[MenuId, list[MenuEntry]] = {}

    for entry in arena.values():
        parent_id = entry.parent_id
        if parent_id is None:
            roots.append(entry)
        elif parent_id not in arena:
            roots.append(entry)
            if on_promoted is not None:
                on_promoted(entry, PromotionReason.MISSING_PARENT)
        elif _in_cycle(entry.id, arena):
            roots.append(entry)
            if on_promoted is not None:
                on_promoted(entry, PromotionReason.CYCLE)
        else:
            children_of.setdefault(parent_id, []).append(entry)

    def to_node(entry: MenuEntry) -> MenuNode:
        children = sorted(children_of.get(entry.id, []), key=lambda e: e.sort_key)
        return MenuNode(
            entry=entry,
            path=entry.resolved_path(tenant_slug),
            children=tuple(to_node(child) for child in children),
        )

    return [to_node(entry) for entry in sorted(roots, key=lambda e: e.sort_key)]


def flatten(nodes: Iterable[MenuNode]) -> list[MenuNode]:
    """Flatten a menu forest depth-first in display order."""
    return [node for root in nodes for node in root.walk()]
