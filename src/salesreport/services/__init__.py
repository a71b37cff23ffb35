"""Service layer exports.

Responsibilities:
 - Dependency/service locator (`services`)
 - EventBus publish/subscribe core
"""

from .service_locator import services, ServiceLocator  # noqa: F401
from .event_bus import EventBus, ReportEvent  # noqa: F401

__all__ = [
    "services",
    "ServiceLocator",
    "EventBus",
    "ReportEvent",
]
