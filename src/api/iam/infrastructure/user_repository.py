"""PostgreSQL implementation of IUserRepository.

Builds the session view of a user from their effective assignments: one
membership per tenant, taken from the highest priority assignment.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from iam.domain.aggregates import User
from iam.domain.value_objects import AssignmentStatus, UserId
from iam.infrastructure.models import RoleModel, UserAssignmentModel, UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.infrastructure.tenant_repository import tenant_from_model
from iam.ports.repositories import IUserRepository
from shared_kernel.auth.session import SessionUser, TenantMembership
from shared_kernel.authorization.types import PermissionKey, RoleLevel


def _role_level(value: str | None) -> RoleLevel:
    try:
        return RoleLevel(value or RoleLevel.USER)
    except ValueError:
        return RoleLevel.USER


class UserRepository(IUserRepository):
    """Repository reading users and their memberships from PostgreSQL."""

    def __init__(
        self,
        session: AsyncSession,
        probe: UserRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def _get_model(self, user_id: UserId) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Fetch user by ID.

        Returns:
            The User aggregate, or None if not found
        """
        model = await self._get_model(user_id)
        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        return User(
            id=UserId(value=model.id),
            email=model.email,
            name=model.name,
            role_level=_role_level(model.role_level),
            is_active=model.is_active,
        )

    async def get_session_user(self, user_id: UserId) -> SessionUser | None:
        """Build the session view of an active user.

        Only active, unexpired assignments in active tenants count. When a
        user holds several assignments in one tenant, the one with the
        highest priority wins (primary assignments break ties).

        Returns:
            SessionUser, or None if the user does not exist or is inactive
        """
        model = await self._get_model(user_id)
        if model is None or not model.is_active:
            self._probe.user_not_found(user_id.value)
            return None

        now = datetime.now(UTC)
        stmt = (
            select(UserAssignmentModel)
            .options(
                selectinload(UserAssignmentModel.role).selectinload(
                    RoleModel.permissions
                ),
                selectinload(UserAssignmentModel.tenant),
            )
            .where(
                UserAssignmentModel.user_id == user_id.value,
                UserAssignmentModel.status == AssignmentStatus.ACTIVE.value,
                or_(
                    UserAssignmentModel.expires_at.is_(None),
                    UserAssignmentModel.expires_at > now,
                ),
            )
            .order_by(
                UserAssignmentModel.priority.desc(),
                UserAssignmentModel.is_primary.desc(),
                UserAssignmentModel.assigned_at,
            )
        )
        result = await self._session.execute(stmt)

        memberships: list[TenantMembership] = []
        seen_tenants: set[str] = set()
        for assignment in result.scalars().all():
            tenant = assignment.tenant
            if tenant is None or not tenant.is_active or tenant.id in seen_tenants:
                continue
            seen_tenants.add(tenant.id)
            memberships.append(
                TenantMembership(
                    tenant=tenant_from_model(tenant).to_context(),
                    role_name=assignment.role.name,
                    role_level=_role_level(assignment.role.level),
                    permissions=frozenset(
                        PermissionKey(resource=p.resource, action=p.action, scope=p.scope)
                        for p in assignment.role.permissions
                    ),
                    is_primary=assignment.is_primary,
                )
            )

        self._probe.session_user_loaded(model.id, len(memberships))
        return SessionUser(
            user_id=model.id,
            email=model.email,
            role_level=_role_level(model.role_level),
            memberships=tuple(memberships),
        )
