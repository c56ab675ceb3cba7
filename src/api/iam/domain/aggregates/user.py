"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import UserId
from shared_kernel.authorization.types import RoleLevel


@dataclass(frozen=True)
class User:
    """User aggregate representing a person in the system.

    Identity is asserted upstream; the platform keeps the email, the display
    name and the platform-wide role level.
    """

    id: UserId
    email: str
    name: str | None = None
    role_level: RoleLevel = RoleLevel.USER
    is_active: bool = True

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.email})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
