"""Authorization primitives shared across bounded contexts."""

from shared_kernel.authorization.types import (
    DEFAULT_ROLE_PRIORITY,
    DEFAULT_SCOPE,
    ROLE_PRIORITY,
    PermissionKey,
    RoleLevel,
    priority_for,
)

__all__ = [
    "DEFAULT_ROLE_PRIORITY",
    "DEFAULT_SCOPE",
    "PermissionKey",
    "ROLE_PRIORITY",
    "RoleLevel",
    "priority_for",
]
