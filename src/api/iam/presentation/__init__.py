"""IAM presentation layer.

Routes are grouped per aggregate; tenants is the only aggregate exposed
over HTTP.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import tenants

router = APIRouter(
    prefix="/iam",
    tags=["iam"],
)

router.include_router(tenants.router)

__all__ = ["router"]
