"""PostgreSQL implementation of IMenuRepository.

Driver and transport failures are wrapped in MenuStoreUnavailableError so
the application layer can degrade without knowing about SQLAlchemy.
Transactions are owned by the caller; the repository only flushes.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import Any

from sqlalchemy import Select, delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from ulid import ULID

from navigation.domain.aggregates import MenuEntry
from navigation.domain.value_objects import MenuId, MenuLocation
from navigation.infrastructure.models import MenuModel, MenuPermissionModel
from navigation.infrastructure.observability import (
    DefaultMenuRepositoryProbe,
    MenuRepositoryProbe,
)
from navigation.ports.exceptions import MenuStoreUnavailableError
from navigation.ports.repositories import (
    ANY_TENANT,
    IMenuRepository,
    MenuFilter,
    TenantFilter,
    UniqueKey,
)
from shared_kernel.authorization.types import PermissionKey


def _to_domain(model: MenuModel) -> MenuEntry:
    """Reconstitute a MenuEntry from its ORM row."""
    return MenuEntry(
        id=MenuId(value=model.id),
        name=model.name,
        label=model.label,
        location=MenuLocation(model.location),
        order=model.order,
        path=model.path,
        url=model.url,
        component=model.component,
        target=model.target,
        category=model.category,
        parent_id=MenuId(value=model.parent_id) if model.parent_id else None,
        tenant_id=model.tenant_id,
        is_active=model.is_active,
        is_public=model.is_public,
        icon=model.icon,
        description=model.description,
        css_class=model.css_class,
        css_style=model.css_style,
        attributes=dict(model.attributes or {}),
        metadata=dict(model.menu_metadata or {}),
        required_permissions=tuple(
            PermissionKey(resource=p.resource, action=p.action, scope=p.scope)
            for p in model.permissions
        ),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_model(entry: MenuEntry) -> MenuModel:
    return MenuModel(
        id=entry.id.value,
        name=entry.name,
        label=entry.label,
        icon=entry.icon,
        path=entry.path,
        component=entry.component,
        url=entry.url,
        target=entry.target,
        parent_id=entry.parent_id.value if entry.parent_id else None,
        tenant_id=entry.tenant_id,
        category=entry.category,
        location=entry.location.value,
        is_active=entry.is_active,
        is_public=entry.is_public,
        order=entry.order,
        description=entry.description,
        css_class=entry.css_class,
        css_style=entry.css_style,
        attributes=dict(entry.attributes),
        menu_metadata=dict(entry.metadata),
        created_at=entry.created_at,
        updated_at=entry.updated_at,
        permissions=[
            MenuPermissionModel(
                id=str(ULID()),
                name=str(permission),
                resource=permission.resource,
                action=permission.action,
                scope=permission.scope,
            )
            for permission in entry.required_permissions
        ],
    )


def _tenant_clause(tenant_id: TenantFilter) -> Any:
    if tenant_id is None:
        return MenuModel.tenant_id.is_(None)
    return MenuModel.tenant_id == tenant_id


def _apply_filter(stmt: Select[Any], menu_filter: MenuFilter) -> Select[Any]:
    if menu_filter.tenant_id is not ANY_TENANT:
        stmt = stmt.where(_tenant_clause(menu_filter.tenant_id))
    if menu_filter.location is not None:
        stmt = stmt.where(MenuModel.location == menu_filter.location.value)
    if menu_filter.is_active is not None:
        stmt = stmt.where(MenuModel.is_active == menu_filter.is_active)
    if menu_filter.is_public is not None:
        stmt = stmt.where(MenuModel.is_public == menu_filter.is_public)
    if menu_filter.category is not None:
        stmt = stmt.where(MenuModel.category == menu_filter.category)
    if menu_filter.search:
        pattern = f"%{menu_filter.search}%"
        stmt = stmt.where(
            or_(MenuModel.name.ilike(pattern), MenuModel.label.ilike(pattern))
        )
    return stmt


class MenuRepository(IMenuRepository):
    """Repository managing PostgreSQL storage for MenuEntry aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: MenuRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultMenuRepositoryProbe()

    def _unavailable(self, operation: str, error: Exception) -> MenuStoreUnavailableError:
        self._probe.menu_store_unavailable(operation, error)
        return MenuStoreUnavailableError(f"Menu store unavailable during {operation}")

    async def find_many(self, menu_filter: MenuFilter) -> list[MenuEntry]:
        """Return entries matching the filter in the requested ordering.

        Raises:
            MenuStoreUnavailableError: If the database cannot be reached
        """
        stmt = _apply_filter(
            select(MenuModel).options(selectinload(MenuModel.permissions)),
            menu_filter,
        )
        if menu_filter.ordering == "location_order":
            stmt = stmt.order_by(MenuModel.location)
        stmt = stmt.order_by(MenuModel.order, MenuModel.created_at, MenuModel.id)

        try:
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            raise self._unavailable("find_many", e) from e

        entries = [_to_domain(model) for model in models]
        self._probe.menus_found(
            len(entries),
            tenant_id=None if menu_filter.tenant_id is ANY_TENANT else menu_filter.tenant_id,
            location=menu_filter.location.value if menu_filter.location else None,
        )
        return entries

    async def count(self, menu_filter: MenuFilter) -> int:
        """Count entries matching the filter.

        Raises:
            MenuStoreUnavailableError: If the database cannot be reached
        """
        stmt = _apply_filter(select(func.count()).select_from(MenuModel), menu_filter)
        try:
            result = await self._session.execute(stmt)
            return int(result.scalar_one())
        except (SQLAlchemyError, OSError) as e:
            raise self._unavailable("count", e) from e

    async def delete_many(self, menu_filter: MenuFilter) -> int:
        """Delete entries matching the filter.

        Permission rows go with their menu (ON DELETE CASCADE); children of
        a deleted menu outside the filter keep existing with a NULL parent.

        Returns:
            Number of deleted entries

        Raises:
            MenuStoreUnavailableError: If the database cannot be reached
        """
        ids_stmt = _apply_filter(select(MenuModel.id), menu_filter)
        try:
            stmt = delete(MenuModel).where(MenuModel.id.in_(ids_stmt.scalar_subquery()))
            result = await self._session.execute(
                stmt, execution_options={"synchronize_session": False}
            )
            await self._session.flush()
        except (SQLAlchemyError, OSError) as e:
            raise self._unavailable("delete_many", e) from e

        deleted = int(result.rowcount or 0)
        self._probe.menus_deleted(
            deleted,
            tenant_id=None if menu_filter.tenant_id is ANY_TENANT else menu_filter.tenant_id,
        )
        return deleted

    async def create_many(
        self, entries: Sequence[MenuEntry], unique_key: UniqueKey
    ) -> int:
        """Insert entries, skipping duplicates by the given key.

        Returns:
            Number of inserted entries

        Raises:
            MenuStoreUnavailableError: If the database cannot be reached
        """
        if not entries:
            return 0

        tenant_ids = {entry.tenant_id for entry in entries}
        clauses = [_tenant_clause(tenant_id) for tenant_id in tenant_ids]
        stmt = (
            select(MenuModel)
            .options(selectinload(MenuModel.permissions))
            .where(or_(*clauses))
        )

        try:
            result = await self._session.execute(stmt)
            seen: set[Hashable] = {
                unique_key(_to_domain(model)) for model in result.scalars().all()
            }

            created = 0
            for entry in entries:
                key = unique_key(entry)
                if key in seen:
                    continue
                seen.add(key)
                self._session.add(_to_model(entry))
                created += 1

            await self._session.flush()
        except (SQLAlchemyError, OSError) as e:
            raise self._unavailable("create_many", e) from e

        self._probe.menus_created(created=created, skipped=len(entries) - created)
        return created

    async def get_by_id(self, menu_id: MenuId) -> MenuEntry | None:
        """Fetch one entry, or None if it does not exist.

        Raises:
            MenuStoreUnavailableError: If the database cannot be reached
        """
        stmt = (
            select(MenuModel)
            .options(selectinload(MenuModel.permissions))
            .where(MenuModel.id == menu_id.value)
        )
        try:
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            raise self._unavailable("get_by_id", e) from e

        if model is None:
            return None
        return _to_domain(model)

    async def list_categories(self, tenant_id: TenantFilter) -> list[str]:
        """Distinct non-null categories of the matching tenant scope, sorted.

        Raises:
            MenuStoreUnavailableError: If the database cannot be reached
        """
        stmt = (
            select(MenuModel.category)
            .where(MenuModel.category.is_not(None))
            .distinct()
            .order_by(MenuModel.category)
        )
        if tenant_id is not ANY_TENANT:
            stmt = stmt.where(_tenant_clause(tenant_id))

        try:
            result = await self._session.execute(stmt)
            return [category for category in result.scalars().all()]
        except (SQLAlchemyError, OSError) as e:
            raise self._unavailable("list_categories", e) from e
