"""Resolved navigation of the current tenant, kept fresh across switches."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from navigation.application.observability import (
    DefaultMenuResolutionProbe,
    MenuResolutionProbe,
)
from navigation.application.route_guard import PermissionsProvider
from navigation.application.services.menu_resolution_service import (
    MenuResolutionService,
)
from navigation.application.tenant_context_resolver import TenantContextResolver
from navigation.domain.menu_tree import MenuNode
from navigation.domain.value_objects import MenuLocation
from shared_kernel.tenancy import Subscription, TenantContext, TenantSwitchNotifier

DEFAULT_LOCATIONS: tuple[MenuLocation, ...] = (
    MenuLocation.HEADER,
    MenuLocation.SIDEBAR,
    MenuLocation.FOOTER,
)


class TenantNavigation:
    """Menus per location for the tenant currently selected.

    Without a tenant the public global navigation is shown. Results of a
    refresh are applied only when the tenant they were resolved for is
    still the current tenant and no newer refresh started meanwhile.
    """

    def __init__(
        self,
        resolver: TenantContextResolver,
        menu_service: MenuResolutionService,
        locations: Sequence[MenuLocation] = DEFAULT_LOCATIONS,
        permissions_provider: PermissionsProvider | None = None,
        probe: MenuResolutionProbe | None = None,
    ) -> None:
        self._resolver = resolver
        self._menu_service = menu_service
        self._locations = tuple(locations)
        self._permissions_provider = permissions_provider
        self._probe = probe or DefaultMenuResolutionProbe()

        self._menus: dict[MenuLocation, list[MenuNode]] = {}
        self._tenant_id: str | None = None
        self._generation = 0
        self._subscription: Subscription | None = None
        self._pending: set[asyncio.Task[bool]] = set()

    @property
    def tenant_id(self) -> str | None:
        """Tenant the applied menus belong to."""
        return self._tenant_id

    def menus(self, location: MenuLocation) -> list[MenuNode]:
        return list(self._menus.get(location, []))

    async def refresh(self) -> bool:
        """Resolve every location for the current tenant.

        Returns:
            True if the results were applied, False if they were stale
        """
        self._generation += 1
        generation = self._generation

        tenant = self._resolver.resolve()
        tenant_id = tenant.id if tenant is not None else None
        held = (
            self._permissions_provider(tenant)
            if tenant is not None and self._permissions_provider is not None
            else None
        )

        resolved: dict[MenuLocation, list[MenuNode]] = {}
        for location in self._locations:
            resolved[location] = await self._menu_service.resolve_menus(
                tenant_id,
                location,
                tenant_slug=tenant.slug if tenant is not None else None,
                held_permissions=held,
            )

        current = self._resolver.resolve()
        current_id = current.id if current is not None else None
        if generation != self._generation or current_id != tenant_id:
            self._probe.stale_resolution_discarded(tenant_id, current_id)
            return False

        self._menus = resolved
        self._tenant_id = tenant_id
        return True

    def attach(self, notifier: TenantSwitchNotifier | None = None) -> None:
        """Refresh whenever the tenant switches."""
        if self._subscription is not None:
            return
        notifier = notifier or self._resolver.notifier
        self._subscription = notifier.subscribe(self._on_tenant_switched)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def wait_for_pending(self) -> None:
        """Wait until every refresh scheduled by tenant switches finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _on_tenant_switched(self, tenant: TenantContext | None) -> None:
        self._generation += 1
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self.refresh())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
