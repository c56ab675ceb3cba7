"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations.
"""

from iam.infrastructure.models.membership import UserAssignmentModel, UserTenantModel
from iam.infrastructure.models.role import PermissionModel, RoleModel, role_permissions
from iam.infrastructure.models.tenant import TenantModel
from iam.infrastructure.models.user import UserModel

__all__ = [
    "PermissionModel",
    "RoleModel",
    "TenantModel",
    "UserAssignmentModel",
    "UserModel",
    "UserTenantModel",
    "role_permissions",
]
