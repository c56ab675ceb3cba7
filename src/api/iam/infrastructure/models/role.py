"""SQLAlchemy ORM models for roles, permissions and their association."""

from sqlalchemy import Column, ForeignKey, String, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin

role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id",
        String(26),
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "permission_id",
        String(26),
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class PermissionModel(Base, TimestampMixin):
    """ORM model for permissions table.

    A permission is unique per (resource, action, scope).
    """

    __tablename__ = "permissions"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    resource: Mapped[str] = mapped_column(String(100), nullable=False)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    scope: Mapped[str] = mapped_column(String(100), nullable=False, default="all")

    __table_args__ = (
        UniqueConstraint("resource", "action", "scope", name="uq_permissions_key"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<PermissionModel(id={self.id}, name={self.name})>"


class RoleModel(Base, TimestampMixin):
    """ORM model for roles table.

    A NULL tenant_id marks a platform-wide role.
    """

    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    level: Mapped[str] = mapped_column(String(20), nullable=False, default="USER")
    tenant_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    permissions: Mapped[list[PermissionModel]] = relationship(
        secondary=role_permissions,
        order_by=PermissionModel.name,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<RoleModel(id={self.id}, name={self.name}, level={self.level})>"
