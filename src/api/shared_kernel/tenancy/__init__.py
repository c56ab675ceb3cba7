"""Tenant identity and tenant switch notification.

TenantContext is the value every bounded context keys tenant-scoped
behaviour on. TenantSwitchNotifier broadcasts changes to it.
"""

from shared_kernel.tenancy.notifier import (
    Subscription,
    TenantSwitchNotifier,
    TenantSwitchObserver,
)
from shared_kernel.tenancy.tenant_context import TenantContext, TenantType

__all__ = [
    "Subscription",
    "TenantContext",
    "TenantSwitchNotifier",
    "TenantSwitchObserver",
    "TenantType",
]
