"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

from ulid import ULID

_IdT = TypeVar("_IdT", bound="_UlidIdentifier")


@dataclass(frozen=True)
class _UlidIdentifier:
    """Base for ULID-backed identifiers."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls: type[_IdT]) -> _IdT:
        """Generate a new identifier using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls: type[_IdT], value: str) -> _IdT:
        """Create an identifier from its string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class TenantId(_UlidIdentifier):
    """Identifier for a Tenant aggregate."""


@dataclass(frozen=True)
class UserId(_UlidIdentifier):
    """Identifier for a User aggregate."""


@dataclass(frozen=True)
class RoleId(_UlidIdentifier):
    """Identifier for a Role aggregate."""


@dataclass(frozen=True)
class AssignmentId(_UlidIdentifier):
    """Identifier for a UserAssignment aggregate."""


class AssignmentStatus(StrEnum):
    """Lifecycle status of a membership or assignment."""

    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    SUSPENDED = "SUSPENDED"
    INACTIVE = "INACTIVE"


# Marks assignments copied from legacy user_tenants rows
MIGRATION_NOTE_MARKER = "Migrated from UserTenant"
