"""Sales rep performance report viewer public API.

Small, stable surface for callers (launcher, tests) that should not depend on
deep module paths. Importing this package never creates a QApplication.
"""

from __future__ import annotations

from .services.service_locator import (  # noqa: F401
    services,
    ServiceLocator,
    ServiceAlreadyRegisteredError,
    ServiceNotFoundError,
)
from .services.event_bus import EventBus, ReportEvent, Event  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "services",
    "ServiceLocator",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "EventBus",
    "ReportEvent",
    "Event",
    "__version__",
]
