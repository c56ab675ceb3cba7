"""In-process tenant switch channel.

Publishes the new TenantContext (or None on logout) to every subscriber
registered at the time of publishing. Delivery is synchronous and follows
registration order. Nothing is persisted or replayed, so a subscriber
registered after an event never sees it.
"""

from __future__ import annotations

from typing import Callable

from shared_kernel.tenancy.observability import (
    DefaultTenantSwitchProbe,
    TenantSwitchProbe,
)
from shared_kernel.tenancy.tenant_context import TenantContext

TenantSwitchObserver = Callable[[TenantContext | None], None]


class Subscription:
    """Handle returned by subscribe(); calling it unsubscribes."""

    def __init__(
        self, notifier: TenantSwitchNotifier, observer: TenantSwitchObserver
    ) -> None:
        self._notifier = notifier
        self._observer = observer
        self._active = True

    @property
    def observer(self) -> TenantSwitchObserver:
        return self._observer

    @property
    def active(self) -> bool:
        return self._active

    def __call__(self) -> None:
        self.unsubscribe()

    def unsubscribe(self) -> None:
        """Stop receiving events. Safe to call more than once."""
        if self._active:
            self._active = False
            self._notifier._remove(self)


class TenantSwitchNotifier:
    """Typed publish/subscribe channel for tenant switches.

    Observers are plain callables taking the new tenant. An observer that
    raises is reported to the probe and does not prevent delivery to the
    observers registered after it.
    """

    def __init__(self, probe: TenantSwitchProbe | None = None) -> None:
        self._subscriptions: list[Subscription] = []
        self._probe = probe or DefaultTenantSwitchProbe()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, observer: TenantSwitchObserver) -> Subscription:
        """Register an observer for future tenant switches.

        Args:
            observer: Callable invoked with the new tenant (None on logout)

        Returns:
            Subscription handle used to unsubscribe
        """
        subscription = Subscription(self, observer)
        self._subscriptions.append(subscription)
        return subscription

    def publish(self, tenant: TenantContext | None) -> None:
        """Deliver a tenant switch to all current observers.

        Args:
            tenant: The newly selected tenant, or None when cleared
        """
        tenant_id = tenant.id if tenant is not None else None
        # Snapshot so observers may unsubscribe while being notified
        subscriptions = list(self._subscriptions)
        self._probe.tenant_switch_published(
            tenant_id=tenant_id, subscriber_count=len(subscriptions)
        )
        for subscription in subscriptions:
            try:
                subscription.observer(tenant)
            except Exception as e:
                self._probe.observer_failed(tenant_id=tenant_id, error=e)

    def _remove(self, subscription: Subscription) -> None:
        # Identity match; the same observer may hold several subscriptions
        self._subscriptions = [s for s in self._subscriptions if s is not subscription]
