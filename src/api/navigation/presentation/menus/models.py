"""Pydantic models for menu API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator

from navigation.domain.aggregates import MenuEntry
from navigation.domain.menu_tree import MenuNode
from navigation.domain.value_objects import MenuId, MenuLocation
from shared_kernel.authorization.types import PermissionKey


class PermissionResponse(BaseModel):
    """A permission required to see a menu."""

    name: str = Field(..., description="resource:action:scope")
    resource: str
    action: str
    scope: str

    @classmethod
    def from_domain(cls, permission: PermissionKey) -> PermissionResponse:
        return cls(
            name=str(permission),
            resource=permission.resource,
            action=permission.action,
            scope=permission.scope,
        )


class MenuResponse(BaseModel):
    """A resolved menu with its children in display order."""

    id: str = Field(..., description="Menu ID (ULID format)")
    name: str
    label: str
    icon: str | None = None
    path: str | None = Field(
        default=None, description="Route path with tenant placeholders resolved"
    )
    url: str | None = None
    component: str | None = None
    target: str | None = None
    parent_id: str | None = None
    tenant_id: str | None = None
    category: str | None = None
    location: MenuLocation
    is_active: bool
    is_public: bool
    order: int
    description: str | None = None
    css_class: str | None = None
    css_style: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime
    permissions: list[PermissionResponse] = Field(default_factory=list)
    children: list[MenuResponse] = Field(default_factory=list)

    @classmethod
    def from_entry(
        cls,
        entry: MenuEntry,
        path: str | None = None,
        children: list[MenuResponse] | None = None,
    ) -> MenuResponse:
        """Convert a MenuEntry; path defaults to the unresolved template."""
        return cls(
            id=entry.id.value,
            name=entry.name,
            label=entry.label,
            icon=entry.icon,
            path=path if path is not None else entry.path,
            url=entry.url,
            component=entry.component,
            target=entry.target,
            parent_id=entry.parent_id.value if entry.parent_id else None,
            tenant_id=entry.tenant_id,
            category=entry.category,
            location=entry.location,
            is_active=entry.is_active,
            is_public=entry.is_public,
            order=entry.order,
            description=entry.description,
            css_class=entry.css_class,
            css_style=entry.css_style,
            attributes=dict(entry.attributes),
            metadata=dict(entry.metadata),
            created_at=entry.created_at,
            updated_at=entry.updated_at,
            permissions=[
                PermissionResponse.from_domain(p) for p in entry.required_permissions
            ],
            children=children or [],
        )

    @classmethod
    def from_domain(cls, node: MenuNode) -> MenuResponse:
        """Convert a resolved MenuNode and its subtree."""
        return cls.from_entry(
            node.entry,
            path=node.path,
            children=[cls.from_domain(child) for child in node.children],
        )


class MenuTreeResponse(BaseModel):
    """Resolved menu tree of one location."""

    tenant_id: str | None
    location: MenuLocation
    menus: list[MenuResponse]


class CreateMenuRequest(BaseModel):
    """A menu to seed, optionally with nested children."""

    name: str = Field(..., min_length=1, max_length=255)
    label: str = Field(..., min_length=1, max_length=255)
    location: MenuLocation = MenuLocation.SIDEBAR
    order: int = 0
    path: str | None = None
    url: str | None = None
    component: str | None = None
    target: str | None = None
    category: str | None = None
    is_active: bool = True
    is_public: bool = False
    icon: str | None = None
    description: str | None = None
    css_class: str | None = None
    css_style: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    permissions: list[str] = Field(
        default_factory=list,
        description="Required permissions as resource:action[:scope]",
    )
    children: list[CreateMenuRequest] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_target(self) -> CreateMenuRequest:
        """Exactly one of path or url."""
        if (self.path is None) == (self.url is None):
            raise ValueError("exactly one of path or url must be set")
        for permission in self.permissions:
            PermissionKey.parse(permission)
        return self

    def to_domain(
        self, tenant_id: str | None, parent_id: MenuId | None = None
    ) -> list[MenuEntry]:
        """Flatten this menu and its children into entries, parents first."""
        entry = MenuEntry.create(
            name=self.name,
            label=self.label,
            location=self.location,
            order=self.order,
            path=self.path,
            url=self.url,
            component=self.component,
            target=self.target,
            category=self.category,
            parent_id=parent_id,
            tenant_id=tenant_id,
            is_active=self.is_active,
            is_public=self.is_public,
            icon=self.icon,
            description=self.description,
            css_class=self.css_class,
            css_style=self.css_style,
            attributes=dict(self.attributes),
            metadata=dict(self.metadata),
            required_permissions=tuple(PermissionKey.parse(p) for p in self.permissions),
        )
        entries = [entry]
        for child in self.children:
            entries.extend(child.to_domain(tenant_id, parent_id=entry.id))
        return entries


class BatchCreateMenusRequest(BaseModel):
    """Menus to seed for one tenant (None seeds global menus)."""

    tenant_id: str | None = None
    menus: list[CreateMenuRequest] = Field(..., min_length=1)

    def to_domain(self) -> list[MenuEntry]:
        entries: list[MenuEntry] = []
        for menu in self.menus:
            entries.extend(menu.to_domain(self.tenant_id))
        return entries


class BatchCreateMenusResponse(BaseModel):
    """Outcome of a batch seed; duplicates are skipped."""

    requested: int
    created: int
    skipped: int


class MenuCountResponse(BaseModel):
    count: int


class MenuCategoriesResponse(BaseModel):
    categories: list[str]


class DeleteMenusResponse(BaseModel):
    deleted: int
