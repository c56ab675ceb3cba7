"""Route guard for tenant-scoped navigation.

Each check moves through CHECKING to either ALLOWED or REDIRECTING:

- Without a current tenant the guard redirects to the login entry point
  and never queries menus.
- With a tenant, the requested path is allowed when it matches one of the
  tenant's resolved menu paths (see navigation.domain.route_access).
- Otherwise, and on any failure while resolving, the guard redirects to
  the default route of the tenant.

A tenant switch supersedes any check in flight and schedules a fresh one
for the last requested path. A check that finishes after being superseded,
or whose tenant is no longer the current tenant, is discarded and returns
None. The most recent check therefore always wins.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Collection

from navigation.application.observability import (
    DefaultRouteGuardProbe,
    RouteGuardProbe,
)
from navigation.application.services.menu_resolution_service import (
    MenuResolutionService,
)
from navigation.application.tenant_context_resolver import TenantContextResolver
from navigation.domain.menu_tree import MenuNode
from navigation.domain.route_access import (
    DEFAULT_LANDING_SEGMENT,
    default_route,
    is_path_accessible,
    menu_paths,
)
from navigation.domain.value_objects import (
    GuardOutcome,
    GuardReason,
    GuardState,
    MenuLocation,
)
from navigation.ports.exceptions import MenuStoreUnavailableError
from shared_kernel.authorization.types import PermissionKey
from shared_kernel.tenancy import Subscription, TenantContext, TenantSwitchNotifier

PermissionsProvider = Callable[[TenantContext], Collection[PermissionKey] | None]
RedirectHandler = Callable[[GuardOutcome], None]

DEFAULT_LOGIN_PATH = "/login"


class RouteGuard:
    """Decides whether a route may be shown for the current tenant."""

    def __init__(
        self,
        resolver: TenantContextResolver,
        menu_service: MenuResolutionService,
        *,
        location: MenuLocation = MenuLocation.SIDEBAR,
        login_path: str = DEFAULT_LOGIN_PATH,
        landing_segment: str = DEFAULT_LANDING_SEGMENT,
        permissions_provider: PermissionsProvider | None = None,
        on_redirect: RedirectHandler | None = None,
        probe: RouteGuardProbe | None = None,
    ) -> None:
        """Initialize the guard.

        Args:
            resolver: Source of the current tenant
            menu_service: Menu resolution service
            location: Menu location whose entries authorize routes
            login_path: Redirect target when no tenant is selected
            landing_segment: Segment of the default landing page
            permissions_provider: Returns the acting user's permissions in a
                tenant, or None to skip permission filtering
            on_redirect: Called with every applied REDIRECTING outcome
            probe: Optional domain probe for observability
        """
        self._resolver = resolver
        self._menu_service = menu_service
        self._location = location
        self._login_path = login_path
        self._landing_segment = landing_segment
        self._permissions_provider = permissions_provider
        self._on_redirect = on_redirect
        self._probe = probe or DefaultRouteGuardProbe()

        self._generation = 0
        self._state = GuardState.CHECKING
        self._outcome: GuardOutcome | None = None
        self._last_path: str | None = None
        self._subscription: Subscription | None = None
        self._pending: set[asyncio.Task[GuardOutcome | None]] = set()

    @property
    def state(self) -> GuardState:
        return self._state

    @property
    def outcome(self) -> GuardOutcome | None:
        """Latest applied outcome; None before the first completed check."""
        return self._outcome

    @property
    def generation(self) -> int:
        return self._generation

    def attach(self, notifier: TenantSwitchNotifier | None = None) -> None:
        """Re-check the last path whenever the tenant switches."""
        if self._subscription is not None:
            return
        notifier = notifier or self._resolver.notifier
        self._subscription = notifier.subscribe(self._on_tenant_switched)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def wait_for_pending(self) -> None:
        """Wait until every re-check scheduled by tenant switches finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _safe_resolve(self) -> tuple[TenantContext | None, bool]:
        """Resolve the tenant, reporting whether resolution itself failed."""
        try:
            return self._resolver.resolve(), False
        except Exception:
            return None, True

    def _safe_durable_slug(self) -> str | None:
        try:
            return self._resolver.durable_slug()
        except Exception:
            return None

    def _is_superseded(self, generation: int, tenant_id: str | None) -> bool:
        if generation != self._generation:
            return True
        current, failed = self._safe_resolve()
        current_id = current.id if current is not None else None
        return failed or current_id != tenant_id

    def _apply(self, outcome: GuardOutcome) -> GuardOutcome:
        self._outcome = outcome
        self._state = outcome.state
        if outcome.state is GuardState.ALLOWED:
            self._probe.route_allowed(outcome.path, outcome.tenant_id)
            return outcome

        assert outcome.redirect_to is not None
        if outcome.indeterminate:
            self._probe.access_indeterminate(outcome.path, outcome.reason.value)
        self._probe.route_redirected(
            outcome.path, outcome.redirect_to, outcome.reason.value, outcome.tenant_id
        )
        if self._on_redirect is not None:
            self._on_redirect(outcome)
        return outcome

    async def check(self, path: str) -> GuardOutcome | None:
        """Run a full access check for a requested path.

        Args:
            path: Requested route path

        Returns:
            The applied outcome, or None if the check was superseded by a
            tenant switch or a newer check while it was resolving menus
        """
        self._generation += 1
        generation = self._generation
        self._last_path = path
        self._state = GuardState.CHECKING

        tenant, tenant_lookup_failed = self._safe_resolve()

        if tenant is None and not tenant_lookup_failed:
            return self._apply(
                GuardOutcome(
                    state=GuardState.REDIRECTING,
                    path=path,
                    reason=GuardReason.NO_TENANT,
                    redirect_to=self._login_path,
                )
            )

        if tenant is None:
            return self._apply(
                GuardOutcome(
                    state=GuardState.REDIRECTING,
                    path=path,
                    reason=GuardReason.RESOLUTION_ERROR,
                    redirect_to=default_route(
                        None, self._safe_durable_slug(), self._landing_segment
                    ),
                )
            )

        nodes: list[MenuNode] | None = None
        failure_reason: GuardReason | None = None
        try:
            held = (
                self._permissions_provider(tenant)
                if self._permissions_provider is not None
                else None
            )
            nodes = await self._menu_service.resolve_menus_or_raise(
                tenant.id,
                self._location,
                tenant_slug=tenant.slug,
                held_permissions=held,
            )
        except MenuStoreUnavailableError:
            failure_reason = GuardReason.MENU_STORE_UNAVAILABLE
        except Exception:
            failure_reason = GuardReason.RESOLUTION_ERROR

        if self._is_superseded(generation, tenant.id):
            self._probe.stale_check_discarded(path, generation)
            return None

        if nodes is not None and is_path_accessible(path, menu_paths(nodes)):
            return self._apply(
                GuardOutcome(
                    state=GuardState.ALLOWED,
                    path=path,
                    reason=GuardReason.MENU_MATCH,
                    tenant_id=tenant.id,
                )
            )

        return self._apply(
            GuardOutcome(
                state=GuardState.REDIRECTING,
                path=path,
                reason=failure_reason or GuardReason.NO_MATCHING_MENU,
                redirect_to=default_route(
                    tenant.slug, self._safe_durable_slug(), self._landing_segment
                ),
                tenant_id=tenant.id,
            )
        )

    def _on_tenant_switched(self, tenant: TenantContext | None) -> None:
        # Supersede anything in flight before scheduling the re-check
        self._generation += 1
        self._state = GuardState.CHECKING
        if self._last_path is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: the next explicit check() evaluates the new tenant
            return
        task = loop.create_task(self.check(self._last_path))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        self._probe.recheck_scheduled(
            self._last_path, tenant.id if tenant is not None else None
        )
