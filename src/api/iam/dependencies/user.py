"""Dependency providers for the acting user.

Authentication happens upstream: the gateway asserts the user through the
X-User-ID header and this service trusts it.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from iam.application.services import TenantService
from iam.dependencies.tenant import get_tenant_service
from iam.domain.value_objects import UserId
from iam.ports.exceptions import UnknownUserError
from shared_kernel.auth.session import SessionUser


async def get_session_user(
    service: Annotated[TenantService, Depends(get_tenant_service)],
    x_user_id: Annotated[str | None, Header(alias="X-User-ID")] = None,
) -> SessionUser:
    """Resolve the session view of the user named by X-User-ID.

    Raises:
        HTTPException 401: If the header is missing or names no active user
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        return await service.get_session_user(UserId(value=x_user_id))
    except UnknownUserError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        ) from e
