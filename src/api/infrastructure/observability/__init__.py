"""Domain-oriented observability infrastructure.

Domain probes encapsulate instrumentation details and provide a clean,
domain-focused API for observability.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from shared_kernel.observability_context import ObservationContext
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
    DefaultStartupProbe,
    StartupProbe,
)

__all__ = [
    "ConnectionProbe",
    "DefaultConnectionProbe",
    "DefaultStartupProbe",
    "ObservationContext",
    "StartupProbe",
]
