"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories without specifying
implementation details, keeping the domain independent of infrastructure.
"""

from iam.ports.exceptions import MigrationError, UnauthorizedError, UnknownUserError
from iam.ports.repositories import (
    IAssignmentRepository,
    ITenantRepository,
    IUserRepository,
)

__all__ = [
    "IAssignmentRepository",
    "ITenantRepository",
    "IUserRepository",
    "MigrationError",
    "UnauthorizedError",
    "UnknownUserError",
]
