"""SQLAlchemy ORM model for the tenants table.

Tenants represent organizations and are the top-level isolation boundary
in the system.
"""

from typing import Any

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class TenantModel(Base, TimestampMixin):
    """ORM model for tenants table.

    Note: Tenant slugs are globally unique; they prefix every
    tenant-scoped route.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="BUSINESS")
    primary_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    settings: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TenantModel(id={self.id}, slug={self.slug})>"
