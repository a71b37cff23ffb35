"""Bridge between range changes and the report provider.

Subscribes to ``ReportEvent.RANGE_CHANGED``, runs ``provider.fetch`` through a
runner and publishes the outcome as ``ReportEvent.FETCH_COMPLETED``.

The default runner is synchronous (headless use, tests). The GUI installs
``salesreport.workers.QtFetchRunner`` so fetches happen on worker threads and
their results come back on the UI thread. In-flight fetches are never
cancelled; each publishes its result whenever it resolves.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from salesreport.services.date_range import DateRange
from salesreport.services.event_bus import Event, EventBus, ReportEvent
from salesreport.services.report_provider import FetchResult, ReportProvider, error_payload

__all__ = ["FetchRunner", "SyncFetchRunner", "FetchCoordinator", "safe_fetch"]

_logger = logging.getLogger(__name__)

FetchCallback = Callable[[FetchResult], None]


class FetchRunner(Protocol):
    def run(self, job: Callable[[], FetchResult], on_done: FetchCallback) -> None: ...


class SyncFetchRunner:
    def run(self, job: Callable[[], FetchResult], on_done: FetchCallback) -> None:
        on_done(job())


def safe_fetch(provider: ReportProvider, date_range: DateRange) -> FetchResult:
    """Call ``provider.fetch`` converting any exception into an error result."""
    try:
        return provider.fetch(date_range.start_date, date_range.end_date)
    except Exception as exc:  # noqa: BLE001 - provider failures become error results
        _logger.exception("Report provider raised for %s", date_range)
        message = str(exc) or type(exc).__name__
        return FetchResult.failure(
            date_range.start_date, date_range.end_date, error_payload(message)
        )


class FetchCoordinator:
    def __init__(
        self,
        event_bus: EventBus,
        provider: ReportProvider,
        runner: FetchRunner | None = None,
    ) -> None:
        self._bus = event_bus
        self.provider = provider
        self._runner = runner or SyncFetchRunner()
        self._subscription = None
        self.issued = 0

    def attach(self) -> None:
        if self._subscription is None:
            self._subscription = self._bus.subscribe(
                ReportEvent.RANGE_CHANGED, self._on_range_changed
            )

    def detach(self) -> None:
        if self._subscription is not None:
            self._bus.unsubscribe(self._subscription)
            self._subscription = None

    @property
    def attached(self) -> bool:
        return self._subscription is not None

    def _on_range_changed(self, event: Event) -> None:
        date_range = event.payload
        if not isinstance(date_range, DateRange):
            return
        self.issued += 1
        _logger.debug("Issuing fetch #%d for %s", self.issued, date_range)
        provider = self.provider
        self._runner.run(lambda: safe_fetch(provider, date_range), self._publish)

    def _publish(self, result: FetchResult) -> None:
        self._bus.publish(ReportEvent.FETCH_COMPLETED, result)
