"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from iam.domain.aggregates.assignment import (
    LegacyMembership,
    UserAssignment,
    migration_note,
)
from iam.domain.aggregates.role import Role
from iam.domain.aggregates.tenant import Tenant, validate_slug
from iam.domain.aggregates.user import User

__all__ = [
    "LegacyMembership",
    "Role",
    "Tenant",
    "User",
    "UserAssignment",
    "migration_note",
    "validate_slug",
]
