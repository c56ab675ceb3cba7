"""Observability for tenant switch notifications."""

from shared_kernel.tenancy.observability.tenant_switch_probe import (
    DefaultTenantSwitchProbe,
    TenantSwitchProbe,
)

__all__ = [
    "DefaultTenantSwitchProbe",
    "TenantSwitchProbe",
]
