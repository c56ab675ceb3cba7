"""Application services for IAM bounded context.

Application services orchestrate domain aggregates, repositories, and
other infrastructure to fulfill use cases. They are the "front door" to
the IAM context.
"""

from iam.application.services.assignment_migration_service import (
    AssignmentMigrationService,
    MigrationReport,
    VerificationReport,
)
from iam.application.services.tenant_service import TenantService

__all__ = [
    "AssignmentMigrationService",
    "MigrationReport",
    "TenantService",
    "VerificationReport",
]
