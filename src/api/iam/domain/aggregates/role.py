"""Role aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field

from iam.domain.value_objects import RoleId
from shared_kernel.authorization.types import PermissionKey, RoleLevel, priority_for


@dataclass(frozen=True)
class Role:
    """A named role with a level and the permissions it grants.

    A null tenant_id marks a platform-wide role.
    """

    id: RoleId
    name: str
    level: RoleLevel = RoleLevel.USER
    tenant_id: str | None = None
    permissions: frozenset[PermissionKey] = field(default_factory=frozenset)

    @property
    def priority(self) -> int:
        return priority_for(self.level)
