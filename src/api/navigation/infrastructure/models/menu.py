"""SQLAlchemy ORM models for the menus and menu_permissions tables."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin


class MenuModel(Base, TimestampMixin):
    """ORM model for menus table.

    Foreign Key Constraints:
    - tenant_id references tenants.id with CASCADE delete; NULL marks a
      global entry
    - parent_id references menus.id with SET NULL delete, so removing a
      parent promotes its children instead of deleting them
    """

    __tablename__ = "menus"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    component: Mapped[str | None] = mapped_column(String(255), nullable=True)
    url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    target: Mapped[str | None] = mapped_column(String(20), nullable=True)
    parent_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("menus.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    tenant_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    location: Mapped[str] = mapped_column(String(20), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order: Mapped[int] = mapped_column("order", Integer, nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    css_class: Mapped[str | None] = mapped_column(String(255), nullable=True)
    css_style: Mapped[str | None] = mapped_column(Text, nullable=True)
    attributes: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict
    )
    menu_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    permissions: Mapped[list["MenuPermissionModel"]] = relationship(
        back_populates="menu",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MenuPermissionModel.name",
    )

    __table_args__ = (
        Index("idx_menus_tenant_location_order", "tenant_id", "location", "order"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<MenuModel(id={self.id}, name={self.name}, "
            f"location={self.location}, tenant_id={self.tenant_id})>"
        )


class MenuPermissionModel(Base):
    """ORM model for menu_permissions table.

    One row per permission a menu entry requires.
    """

    __tablename__ = "menu_permissions"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    menu_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("menus.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    resource: Mapped[str] = mapped_column(String(100), nullable=False)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    scope: Mapped[str] = mapped_column(String(100), nullable=False, default="all")

    menu: Mapped[MenuModel] = relationship(back_populates="permissions")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<MenuPermissionModel(menu_id={self.menu_id}, name={self.name})>"
