"""Domain-Oriented Observability for the navigation application layer."""

from navigation.application.observability.menu_admin_probe import (
    DefaultMenuAdminProbe,
    MenuAdminProbe,
)
from navigation.application.observability.menu_resolution_probe import (
    DefaultMenuResolutionProbe,
    MenuResolutionProbe,
)
from navigation.application.observability.route_guard_probe import (
    DefaultRouteGuardProbe,
    RouteGuardProbe,
)
from navigation.application.observability.tenant_context_probe import (
    DefaultTenantContextResolverProbe,
    TenantContextResolverProbe,
)

__all__ = [
    "DefaultMenuAdminProbe",
    "DefaultMenuResolutionProbe",
    "DefaultRouteGuardProbe",
    "DefaultTenantContextResolverProbe",
    "MenuAdminProbe",
    "MenuResolutionProbe",
    "RouteGuardProbe",
    "TenantContextResolverProbe",
]
