"""Pydantic models for route access checks."""

from __future__ import annotations

from pydantic import BaseModel, Field

from navigation.domain.value_objects import GuardOutcome, GuardReason, GuardState


class RouteAccessRequest(BaseModel):
    """A route to check, for the tenant named by ID or slug.

    Without either, the check runs with no tenant selected.
    """

    path: str = Field(..., min_length=1, description="Requested route path")
    tenant_id: str | None = None
    tenant_slug: str | None = None


class RouteAccessResponse(BaseModel):
    """Outcome of a route guard check."""

    state: GuardState
    path: str
    allowed: bool
    reason: GuardReason
    redirect_to: str | None = None
    tenant_id: str | None = None
    indeterminate: bool = Field(
        default=False,
        description="The redirect stems from a failure, not from missing access",
    )

    @classmethod
    def from_domain(cls, outcome: GuardOutcome) -> RouteAccessResponse:
        return cls(
            state=outcome.state,
            path=outcome.path,
            allowed=outcome.allowed,
            reason=outcome.reason,
            redirect_to=outcome.redirect_to,
            tenant_id=outcome.tenant_id,
            indeterminate=outcome.indeterminate,
        )
