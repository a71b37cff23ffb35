"""Application bootstrap for the sales report viewer.

Responsibilities:
 - Optional headless bootstrap (tests / environments without a display)
 - Attaching the in-memory LoggingService to the root logger
 - Registering core services (event bus, provider, notification sink)
 - Wiring the FetchCoordinator so range changes trigger provider fetches

PyQt6 is imported lazily so headless tests never create a QApplication.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from config import settings
from salesreport.services.event_bus import EventBus
from salesreport.services.fetch_coordinator import FetchCoordinator, FetchRunner, SyncFetchRunner
from salesreport.services.logging_service import LoggingService
from salesreport.services.notification_service import (
    NotificationSink,
    RecordingNotificationSink,
)
from salesreport.services.report_provider import HttpReportProvider, ReportProvider
from salesreport.services.service_locator import ServiceLocator, services

try:  # Lazy / optional Qt import
    from PyQt6.QtWidgets import QApplication  # type: ignore

    _QT_AVAILABLE = True
except ImportError:
    QApplication = None  # type: ignore
    _QT_AVAILABLE = False

_logger = logging.getLogger(__name__)

__all__ = ["AppContext", "create_app"]


@dataclass
class AppContext:
    """Container with references created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication instance (None when headless)
    headless: Whether headless bootstrap was used
    services: Global service locator (post-initialization state)
    event_bus: Bus shared by the viewmodel and the fetch coordinator
    provider: Report data provider
    notification_sink: Where fetch failures are reported
    coordinator: Subscriber turning range changes into fetches
    logging_service: Ring buffer of recent log records
    duration_s: Total elapsed seconds for bootstrap
    """

    qt_app: Optional[Any]
    headless: bool
    services: ServiceLocator
    event_bus: EventBus
    provider: ReportProvider
    notification_sink: NotificationSink
    coordinator: FetchCoordinator
    logging_service: LoggingService
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)

    def set_notification_sink(self, sink: NotificationSink) -> None:
        self.notification_sink = sink
        self.services.register("notification_sink", sink, allow_override=True)


def create_app(
    *,
    headless: bool | None = None,
    provider: ReportProvider | None = None,
    notification_sink: NotificationSink | None = None,
    runner: FetchRunner | None = None,
    endpoint: str | None = None,
    log_level: str | None = None,
) -> AppContext:
    """Create and initialize the application context.

    Parameters
    ----------
    headless: Force headless (no QApplication). If None, inferred by Qt availability.
    provider: Report provider; defaults to ``HttpReportProvider(endpoint)``.
    notification_sink: Defaults to an in-memory ``RecordingNotificationSink``.
    runner: Fetch runner; defaults to a Qt worker runner with a GUI, else synchronous.
    """
    started = time.perf_counter()
    if headless is None:
        headless = not _QT_AVAILABLE

    qt_app = None
    if not headless and _QT_AVAILABLE:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    level = (log_level or settings.LOG_LEVEL).upper()
    logging_service = services.try_get("logging_service")
    if not isinstance(logging_service, LoggingService):
        logging_service = LoggingService(level=level)
    logging_service.attach_root()
    logging.getLogger("salesreport").setLevel(level)

    bus = EventBus()
    provider = provider or HttpReportProvider(endpoint)
    sink = notification_sink or RecordingNotificationSink()
    if runner is None:
        if qt_app is not None:
            from salesreport.workers import QtFetchRunner

            runner = QtFetchRunner(qt_app)
        else:
            runner = SyncFetchRunner()

    previous = services.try_get("fetch_coordinator")
    if isinstance(previous, FetchCoordinator):
        previous.detach()
    coordinator = FetchCoordinator(bus, provider, runner)
    coordinator.attach()

    # Each bootstrap gets fresh instances (test isolation)
    for name, value in [
        ("event_bus", bus),
        ("logging_service", logging_service),
        ("report_provider", provider),
        ("notification_sink", sink),
        ("fetch_coordinator", coordinator),
    ]:
        services.register(name, value, allow_override=True)

    duration = time.perf_counter() - started
    _logger.debug("Bootstrap finished in %.3fs (headless=%s)", duration, headless)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        services=services,
        event_bus=bus,
        provider=provider,
        notification_sink=sink,
        coordinator=coordinator,
        logging_service=logging_service,
        duration_s=duration,
        metadata={"qt_available": _QT_AVAILABLE, "provider": type(provider).__name__},
    )
