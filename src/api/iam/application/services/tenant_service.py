"""Tenant application service for IAM bounded context.

Answers the tenant questions a navigation shell asks: which tenants may
this user switch to, and which tenant does a URL slug name.
"""

from __future__ import annotations

from iam.application.observability import DefaultTenantServiceProbe, TenantServiceProbe
from iam.domain.value_objects import TenantId, UserId
from iam.ports.exceptions import UnauthorizedError, UnknownUserError
from iam.ports.repositories import ITenantRepository, IUserRepository
from shared_kernel.auth.session import SessionUser
from shared_kernel.tenancy import TenantContext


class TenantService:
    """Application service for tenant lookups scoped to a user."""

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        user_repository: IUserRepository,
        probe: TenantServiceProbe | None = None,
    ):
        """Initialize TenantService with dependencies.

        Args:
            tenant_repository: Repository for tenant lookups
            user_repository: Repository building session users
            probe: Optional domain probe for observability
        """
        self._tenant_repository = tenant_repository
        self._user_repository = user_repository
        self._probe = probe or DefaultTenantServiceProbe()

    async def get_session_user(self, user_id: UserId) -> SessionUser:
        """Load the session view of the acting user.

        Raises:
            UnknownUserError: If the user does not exist or is inactive
        """
        session_user = await self._user_repository.get_session_user(user_id)
        if session_user is None:
            self._probe.unknown_user(user_id.value)
            raise UnknownUserError(f"Unknown user {user_id.value}")
        return session_user

    async def list_switchable_tenants(
        self, user: UserId | SessionUser
    ) -> list[TenantContext]:
        """List the tenants a user may switch to.

        Super admins may switch to every active tenant, ordered by name.
        Everyone else gets the tenants of their effective assignments,
        primary first, then by role priority.

        Args:
            user: The user ID, or an already loaded session user

        Raises:
            UnknownUserError: If the user does not exist or is inactive
        """
        session_user = (
            user if isinstance(user, SessionUser) else await self.get_session_user(user)
        )

        if session_user.is_super_admin:
            tenants = [
                tenant.to_context()
                for tenant in await self._tenant_repository.list_all(active_only=True)
            ]
        else:
            tenants = session_user.switchable_tenants()

        self._probe.switchable_tenants_listed(session_user.user_id, len(tenants))
        return tenants

    async def get_by_slug(
        self, slug: str, user: SessionUser | None = None
    ) -> TenantContext | None:
        """Resolve a URL slug to a tenant.

        Args:
            slug: The tenant slug
            user: When given, the tenant must be accessible to this user

        Returns:
            The tenant context, or None if no active tenant has the slug

        Raises:
            UnauthorizedError: If the user holds no assignment in the tenant
        """
        tenant = await self._tenant_repository.get_by_slug(slug)
        if tenant is None or not tenant.is_active:
            self._probe.tenant_not_found(slug)
            return None

        if user is not None and not user.can_access_tenant(tenant.id.value):
            raise UnauthorizedError(
                f"User {user.user_id} cannot access tenant {tenant.id.value}"
            )

        self._probe.tenant_slug_resolved(tenant.id.value, slug)
        return tenant.to_context()

    async def get_tenant(self, tenant_id: str) -> TenantContext | None:
        """Look up an active tenant by ID.

        Returns:
            The tenant context, or None if no active tenant has the ID
        """
        tenant = await self._tenant_repository.get_by_id(TenantId(value=tenant_id))
        if tenant is None or not tenant.is_active:
            return None
        return tenant.to_context()
