"""Session identity shared kernel module."""

from shared_kernel.auth.session import SessionUser, TenantMembership

__all__ = [
    "SessionUser",
    "TenantMembership",
]
