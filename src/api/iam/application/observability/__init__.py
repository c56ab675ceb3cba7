"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.assignment_migration_probe import (
    AssignmentMigrationProbe,
    DefaultAssignmentMigrationProbe,
)
from iam.application.observability.tenant_service_probe import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)

__all__ = [
    "AssignmentMigrationProbe",
    "DefaultAssignmentMigrationProbe",
    "TenantServiceProbe",
    "DefaultTenantServiceProbe",
]
