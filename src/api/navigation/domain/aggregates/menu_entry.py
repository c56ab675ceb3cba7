"""MenuEntry aggregate for the navigation context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from navigation.domain.value_objects import (
    TENANT_PLACEHOLDERS,
    MenuId,
    MenuLocation,
    PermissionMatchPolicy,
)
from shared_kernel.authorization.types import PermissionKey

EXTERNAL_LINK_TARGET = "_blank"


@dataclass
class MenuEntry:
    """A navigation item with placement, target and authorization metadata.

    Business rules:
    - Exactly one of ``path`` (internal route template) or ``url``
      (external absolute URL) is set
    - External links open in a new tab unless a target is given
    - An entry cannot be its own parent
    - A null ``tenant_id`` marks a global entry; public global entries
      make up the header/footer navigation shown without a tenant
    """

    id: MenuId
    name: str
    label: str
    location: MenuLocation = MenuLocation.SIDEBAR
    order: int = 0
    path: str | None = None
    url: str | None = None
    component: str | None = None
    target: str | None = None
    category: str | None = None
    parent_id: MenuId | None = None
    tenant_id: str | None = None
    is_active: bool = True
    is_public: bool = False
    icon: str | None = None
    description: str | None = None
    css_class: str | None = None
    css_style: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    required_permissions: tuple[PermissionKey, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Menu name is required")
        if (self.path is None) == (self.url is None):
            raise ValueError(
                f"Menu '{self.name}' must define exactly one of path or url"
            )
        if self.url is not None and self.target is None:
            self.target = EXTERNAL_LINK_TARGET
        if self.parent_id is not None and self.parent_id == self.id:
            raise ValueError(f"Menu '{self.name}' cannot be its own parent")
        self.location = MenuLocation(self.location)
        self.required_permissions = tuple(self.required_permissions)

    @classmethod
    def create(
        cls,
        name: str,
        label: str,
        location: MenuLocation = MenuLocation.SIDEBAR,
        **kwargs: Any,
    ) -> MenuEntry:
        """Factory method for creating a new menu entry.

        Args:
            name: Human-stable key of the entry
            label: Display label
            location: UI region of the entry
            **kwargs: Remaining MenuEntry attributes

        Returns:
            A new MenuEntry with a generated ID
        """
        return cls(
            id=MenuId.generate(),
            name=name,
            label=label,
            location=location,
            **kwargs,
        )

    @property
    def is_external(self) -> bool:
        return self.url is not None

    @property
    def sort_key(self) -> tuple[int, datetime, str]:
        """Total display order: order, then creation time, then ID."""
        return (self.order, self.created_at, self.id.value)

    def is_visible_to(
        self,
        held_permissions: set[PermissionKey] | frozenset[PermissionKey] | None,
        policy: PermissionMatchPolicy = PermissionMatchPolicy.ANY,
    ) -> bool:
        """Check the entry's permission requirements.

        Args:
            held_permissions: Permissions of the acting user, or None when no
                permission filter applies
            policy: How required permissions are matched

        Returns:
            True if the entry may be shown
        """
        if held_permissions is None:
            return True
        return policy.is_satisfied(self.required_permissions, held_permissions)

    def resolved_path(self, tenant_slug: str | None) -> str | None:
        """Return the path with tenant placeholders substituted.

        Without a slug the literal template is kept.
        """
        if self.path is None or not tenant_slug:
            return self.path
        resolved = self.path
        for placeholder in TENANT_PLACEHOLDERS:
            resolved = resolved.replace(placeholder, tenant_slug)
        return resolved

    def unique_key(self) -> tuple[str | None, str, str]:
        """Key used to skip duplicates when seeding menus."""
        return (self.tenant_id, self.location.value, self.name)
