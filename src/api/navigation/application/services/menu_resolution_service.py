"""Menu resolution application service.

Turns (tenant, location, held permissions) into the ordered menu forest a
navigation view renders. Every call re-queries the store; there is no
caching at this layer.
"""

from __future__ import annotations

from collections.abc import Collection

from navigation.application.observability import (
    DefaultMenuResolutionProbe,
    MenuResolutionProbe,
)
from navigation.domain.aggregates import MenuEntry
from navigation.domain.menu_tree import MenuNode, PromotionReason, build_menu_tree
from navigation.domain.value_objects import MenuLocation, PermissionMatchPolicy
from navigation.ports.exceptions import MenuStoreUnavailableError
from navigation.ports.repositories import ANY_TENANT, IMenuRepository, MenuFilter
from shared_kernel.authorization.types import PermissionKey


def is_eligible(
    entry: MenuEntry, tenant_id: str | None, location: MenuLocation
) -> bool:
    """Selection predicate for a resolution request.

    An entry is eligible when it is active, sits at the requested location,
    and either belongs to the requested tenant or, for requests without a
    tenant, is public whichever tenant owns it.
    """
    if not entry.is_active or entry.location != location:
        return False
    if tenant_id is None:
        return entry.is_public
    return entry.tenant_id == tenant_id


class MenuResolutionService:
    """Resolves the visible menu hierarchy for a tenant and location."""

    def __init__(
        self,
        repository: IMenuRepository,
        policy: PermissionMatchPolicy = PermissionMatchPolicy.ANY,
        probe: MenuResolutionProbe | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Menu store
            policy: How required permissions are matched against held ones
            probe: Optional domain probe for observability
        """
        self._repository = repository
        self._policy = policy
        self._probe = probe or DefaultMenuResolutionProbe()

    @property
    def policy(self) -> PermissionMatchPolicy:
        return self._policy

    async def resolve_menus_or_raise(
        self,
        tenant_id: str | None,
        location: MenuLocation,
        *,
        tenant_slug: str | None = None,
        held_permissions: Collection[PermissionKey] | None = None,
    ) -> list[MenuNode]:
        """Resolve menus, letting store failures propagate.

        Args:
            tenant_id: Requesting tenant, or None for public navigation
            location: Menu location to resolve
            tenant_slug: Slug substituted into tenant placeholders
            held_permissions: Permissions of the acting user; None skips
                permission filtering

        Returns:
            Top-level menu nodes in display order

        Raises:
            MenuStoreUnavailableError: If the menu store cannot be reached
        """
        if tenant_id is None:
            menu_filter = MenuFilter(
                tenant_id=ANY_TENANT,
                location=location,
                is_active=True,
                is_public=True,
            )
        else:
            menu_filter = MenuFilter(
                tenant_id=tenant_id, location=location, is_active=True
            )
        candidates = await self._repository.find_many(menu_filter)

        held = frozenset(held_permissions) if held_permissions is not None else None
        eligible = [
            entry
            for entry in candidates
            if is_eligible(entry, tenant_id, location)
            and entry.is_visible_to(held, self._policy)
        ]

        def report_promotion(entry: MenuEntry, reason: PromotionReason) -> None:
            self._probe.menu_promoted_to_top_level(entry.id.value, reason.value)

        nodes = build_menu_tree(
            eligible, tenant_slug=tenant_slug, on_promoted=report_promotion
        )
        self._probe.menus_resolved(tenant_id, location.value, len(eligible))
        return nodes

    async def resolve_menus(
        self,
        tenant_id: str | None,
        location: MenuLocation,
        *,
        tenant_slug: str | None = None,
        held_permissions: Collection[PermissionKey] | None = None,
    ) -> list[MenuNode]:
        """Resolve menus, degrading to an empty list when the store is down.

        An empty result means "no known menus", not "definitely no menus".
        Callers that authorize on menus should use resolve_menus_or_raise to
        tell the two apart.
        """
        try:
            return await self.resolve_menus_or_raise(
                tenant_id,
                location,
                tenant_slug=tenant_slug,
                held_permissions=held_permissions,
            )
        except MenuStoreUnavailableError as e:
            self._probe.menus_degraded_to_empty(tenant_id, location.value, e)
            return []

    async def resolve_public_menus(self, location: MenuLocation) -> list[MenuNode]:
        """Public global navigation (header/footer without a tenant)."""
        return await self.resolve_menus(None, location)
