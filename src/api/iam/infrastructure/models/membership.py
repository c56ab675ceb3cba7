"""SQLAlchemy ORM models for user memberships.

user_tenants is the legacy membership table; user_assignments replaces it
and adds a priority derived from the role level.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from iam.infrastructure.models.role import RoleModel
from iam.infrastructure.models.tenant import TenantModel
from infrastructure.database.models import Base, TimestampMixin


class UserTenantModel(Base, TimestampMixin):
    """ORM model for the legacy user_tenants table."""

    __tablename__ = "user_tenants"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    tenant_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False
    )
    role_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("roles.id", ondelete="RESTRICT"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="ACTIVE")
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    assigned_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    assigned_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    role: Mapped[RoleModel] = relationship()

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserTenantModel(id={self.id}, user_id={self.user_id})>"


class UserAssignmentModel(Base, TimestampMixin):
    """ORM model for user_assignments table."""

    __tablename__ = "user_assignments"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tenant_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("roles.id", ondelete="RESTRICT"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="ACTIVE")
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    assigned_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    assigned_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    role: Mapped[RoleModel] = relationship()
    tenant: Mapped[TenantModel] = relationship()

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<UserAssignmentModel(id={self.id}, user_id={self.user_id}, "
            f"tenant_id={self.tenant_id}, priority={self.priority})>"
        )
