"""Authorization type definitions shared across bounded contexts.

Defines the permission key carried by roles and menu entries, and the role
level ladder with its priority mapping. Assignment priority downstream is
derived from this mapping, so its values are a stable contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_SCOPE = "all"


@dataclass(frozen=True, order=True)
class PermissionKey:
    """A permission as a (resource, action, scope) triple.

    The canonical string form is ``resource:action:scope``.
    """

    resource: str
    action: str
    scope: str = DEFAULT_SCOPE

    def __post_init__(self) -> None:
        if not self.resource or not self.action or not self.scope:
            raise ValueError("Permission resource, action and scope are required")

    def __str__(self) -> str:
        """Return canonical string representation."""
        return f"{self.resource}:{self.action}:{self.scope}"

    @classmethod
    def parse(cls, value: str) -> PermissionKey:
        """Parse ``resource:action`` or ``resource:action:scope``.

        Args:
            value: Permission string

        Returns:
            PermissionKey instance

        Raises:
            ValueError: If the string does not have two or three segments
        """
        parts = value.split(":")
        if len(parts) == 2:
            return cls(resource=parts[0], action=parts[1])
        if len(parts) == 3:
            return cls(resource=parts[0], action=parts[1], scope=parts[2])
        raise ValueError(f"Invalid permission: {value}")


class RoleLevel(StrEnum):
    """Role levels from most to least privileged."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"
    GUEST = "GUEST"


ROLE_PRIORITY: dict[RoleLevel, int] = {
    RoleLevel.SUPER_ADMIN: 10,
    RoleLevel.ADMIN: 8,
    RoleLevel.MANAGER: 6,
    RoleLevel.USER: 4,
    RoleLevel.GUEST: 2,
}

DEFAULT_ROLE_PRIORITY = 4


def priority_for(level: RoleLevel | str | None) -> int:
    """Return the assignment priority for a role level.

    Unknown or missing levels get the default priority.

    Example:
        >>> priority_for("MANAGER")
        6
        >>> priority_for("OWNER")
        4
    """
    if level is None:
        return DEFAULT_ROLE_PRIORITY
    try:
        return ROLE_PRIORITY[RoleLevel(level)]
    except ValueError:
        return DEFAULT_ROLE_PRIORITY
