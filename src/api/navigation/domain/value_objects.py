"""Value objects for the navigation domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and navigation concepts.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID

from shared_kernel.authorization.types import PermissionKey

# Placeholders substituted with the tenant slug in menu paths
TENANT_PLACEHOLDERS = ("{tenant}", "[tenant]")


@dataclass(frozen=True)
class MenuId:
    """Identifier for a MenuEntry aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> MenuId:
        """Generate a new MenuId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> MenuId:
        """Create MenuId from string value.

        Args:
            value: ULID string

        Returns:
            MenuId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid MenuId: {value}") from e

        return cls(value=value)


class MenuLocation(StrEnum):
    """UI region a menu entry is rendered in."""

    HEADER = "HEADER"
    SIDEBAR = "SIDEBAR"
    FOOTER = "FOOTER"
    CUSTOM = "CUSTOM"


class MenuCategory(StrEnum):
    """Well-known menu categories.

    Categories are free-form strings; these are the groupings the seeded
    navigation uses.
    """

    DASHBOARD = "DASHBOARD"
    MANAGER_ADMIN = "MANAGER_ADMIN"
    NAVIGATION = "NAVIGATION"


class PermissionMatchPolicy(StrEnum):
    """How a menu entry's required permissions are matched.

    ANY: the user must hold at least one of the required permissions.
    ALL: the user must hold every required permission.
    Entries without required permissions are visible under both policies.
    """

    ANY = "any"
    ALL = "all"

    def is_satisfied(
        self,
        required: Collection[PermissionKey],
        held: Collection[PermissionKey],
    ) -> bool:
        """Check whether held permissions satisfy a required set."""
        if not required:
            return True
        held_set = set(held)
        if self is PermissionMatchPolicy.ALL:
            return all(permission in held_set for permission in required)
        return any(permission in held_set for permission in required)


class GuardState(StrEnum):
    """States of a route access check."""

    CHECKING = "CHECKING"
    ALLOWED = "ALLOWED"
    REDIRECTING = "REDIRECTING"


class GuardReason(StrEnum):
    """Why a route access check ended the way it did."""

    MENU_MATCH = "menu_match"
    NO_MATCHING_MENU = "no_matching_menu"
    MENU_STORE_UNAVAILABLE = "menu_store_unavailable"
    RESOLUTION_ERROR = "resolution_error"
    NO_TENANT = "no_tenant"


@dataclass(frozen=True)
class GuardOutcome:
    """Result of a route access check.

    Attributes:
        state: ALLOWED or REDIRECTING
        path: The requested path
        redirect_to: Fallback route when redirecting, None when allowed
        reason: Why the check ended in this state
        tenant_id: Tenant the check was evaluated for (None without tenant)
    """

    state: GuardState
    path: str
    reason: GuardReason
    redirect_to: str | None = None
    tenant_id: str | None = None

    @property
    def allowed(self) -> bool:
        return self.state is GuardState.ALLOWED

    @property
    def indeterminate(self) -> bool:
        """True when access could not be determined rather than denied."""
        return self.reason in (
            GuardReason.MENU_STORE_UNAVAILABLE,
            GuardReason.RESOLUTION_ERROR,
        )
