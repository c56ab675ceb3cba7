"""Current tenant of a client session.

The resolver reconciles two sources: the in-memory selection made during
the session and the durable record that survives reloads. It is the single
writer of both; everybody else reads through resolve(). Resolvers are plain
objects handed to the services that need them, so several simulated
sessions can coexist in one process.
"""

from __future__ import annotations

import json

from navigation.application.observability import (
    DefaultTenantContextResolverProbe,
    TenantContextResolverProbe,
)
from navigation.ports.durable_store import SESSION_KEYS, DurableKey, IDurableStore
from navigation.ports.exceptions import TenantAccessDeniedError
from shared_kernel.auth.session import SessionUser
from shared_kernel.tenancy import TenantContext, TenantSwitchNotifier


class TenantContextResolver:
    """Resolves, selects and clears the current tenant of a session.

    Every mutation is published on the tenant switch notifier.
    """

    def __init__(
        self,
        store: IDurableStore,
        notifier: TenantSwitchNotifier | None = None,
        probe: TenantContextResolverProbe | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            store: Durable client record
            notifier: Channel receiving tenant switches; a private one is
                created when omitted
            probe: Optional domain probe for observability
        """
        self._store = store
        self._notifier = notifier or TenantSwitchNotifier()
        self._probe = probe or DefaultTenantContextResolverProbe()
        self._current: TenantContext | None = None

    @property
    def notifier(self) -> TenantSwitchNotifier:
        return self._notifier

    def _read_json(self, key: str) -> object | None:
        """Read and decode a durable JSON value, discarding it if malformed."""
        raw = self._store.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            self._discard(key, e)
            return None

    def _discard(self, key: str, error: Exception) -> None:
        self._store.remove_item(key)
        self._probe.malformed_record_discarded(key, error)

    def _read_durable_tenant(self) -> TenantContext | None:
        data = self._read_json(DurableKey.CURRENT_TENANT)
        if data is None:
            return None
        try:
            return TenantContext.from_dict(data)
        except ValueError as e:
            self._discard(DurableKey.CURRENT_TENANT, e)
            return None

    def resolve(self) -> TenantContext | None:
        """Return the current tenant, or None when no tenant is selected.

        The in-memory selection wins; otherwise the durable record is read
        and cached in memory. A malformed durable record is discarded and
        treated as absent.
        """
        if self._current is not None:
            self._probe.tenant_resolved(self._current.id, source="memory")
            return self._current

        tenant = self._read_durable_tenant()
        if tenant is None:
            self._probe.no_tenant_resolved()
            return None

        self._current = tenant
        self._probe.tenant_resolved(tenant.id, source="durable")
        return tenant

    def durable_slug(self) -> str | None:
        """Slug of the tenant in the durable record, ignoring memory."""
        tenant = self._read_durable_tenant()
        return tenant.slug if tenant is not None else None

    def stored_user(self) -> SessionUser | None:
        """The signed-in user from the durable record, if readable.

        ``authUser`` is preferred over the older ``user`` key.
        """
        for key in (DurableKey.AUTH_USER, DurableKey.USER):
            data = self._read_json(key)
            if data is None:
                continue
            try:
                return SessionUser.from_dict(data)
            except ValueError as e:
                self._discard(key, e)
        return None

    def set_current(self, tenant: TenantContext) -> None:
        """Select a tenant: update memory, persist durably, then notify."""
        self._current = tenant
        self._store.set_item(DurableKey.CURRENT_TENANT, json.dumps(tenant.to_dict()))
        self._probe.tenant_selected(tenant.id, tenant.slug)
        self._notifier.publish(tenant)

    def switch_tenant(self, user: SessionUser, tenant: TenantContext) -> None:
        """Select a tenant on behalf of a user.

        Super admins may select any tenant; other users only tenants they
        are a member of.

        Raises:
            TenantAccessDeniedError: If the user cannot access the tenant
        """
        if not user.can_access_tenant(tenant.id):
            self._probe.tenant_switch_denied(user.user_id, tenant.id)
            raise TenantAccessDeniedError(
                f"User {user.user_id} cannot access tenant {tenant.id}"
            )
        self.set_current(tenant)

    def clear(self) -> None:
        """Forget the tenant and the session records (logout), then notify."""
        self._current = None
        for key in SESSION_KEYS:
            self._store.remove_item(key)
        self._probe.tenant_cleared()
        self._notifier.publish(None)
