"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from iam.infrastructure.observability.repository_probe import (
    AssignmentRepositoryProbe,
    DefaultAssignmentRepositoryProbe,
    DefaultTenantRepositoryProbe,
    DefaultUserRepositoryProbe,
    TenantRepositoryProbe,
    UserRepositoryProbe,
)

__all__ = [
    "AssignmentRepositoryProbe",
    "DefaultAssignmentRepositoryProbe",
    "DefaultTenantRepositoryProbe",
    "DefaultUserRepositoryProbe",
    "TenantRepositoryProbe",
    "UserRepositoryProbe",
]
