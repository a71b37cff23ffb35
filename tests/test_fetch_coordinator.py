from datetime import date

from salesreport.services.date_range import DateRange
from salesreport.services.event_bus import EventBus, ReportEvent
from salesreport.services.fetch_coordinator import FetchCoordinator, safe_fetch
from salesreport.services.report_provider import FetchFailure, StaticReportProvider

RANGE = DateRange(date(2020, 3, 1), date(2020, 3, 31))


class ExplodingProvider:
    def fetch(self, start_date, end_date):
        raise RuntimeError("provider crashed")


class DeferredRunner:
    """Holds jobs so tests decide the order in which fetches resolve."""

    def __init__(self):
        self.pending = []

    def run(self, job, on_done):
        self.pending.append((job, on_done))

    def resolve(self, index):
        job, on_done = self.pending.pop(index)
        on_done(job())


def test_range_change_triggers_fetch_and_publishes_result():
    bus = EventBus()
    provider = StaticReportProvider([{"salesRepName": "A"}])
    coordinator = FetchCoordinator(bus, provider)
    coordinator.attach()
    results = []
    bus.subscribe(ReportEvent.FETCH_COMPLETED, lambda e: results.append(e.payload))
    bus.publish(ReportEvent.RANGE_CHANGED, RANGE)
    assert provider.calls == [(RANGE.start_date, RANGE.end_date)]
    assert results[0].data == [{"salesRepName": "A"}]
    assert coordinator.issued == 1


def test_detach_stops_fetching():
    bus = EventBus()
    provider = StaticReportProvider()
    coordinator = FetchCoordinator(bus, provider)
    coordinator.attach()
    coordinator.attach()  # idempotent
    assert bus.subscriber_count(ReportEvent.RANGE_CHANGED) == 1
    coordinator.detach()
    assert not coordinator.attached
    bus.publish(ReportEvent.RANGE_CHANGED, RANGE)
    assert provider.calls == []


def test_non_range_payload_is_ignored():
    bus = EventBus()
    provider = StaticReportProvider()
    FetchCoordinator(bus, provider).attach()
    bus.publish(ReportEvent.RANGE_CHANGED, {"start": "2020-03-01"})
    assert provider.calls == []


def test_provider_exception_becomes_error_result():
    result = safe_fetch(ExplodingProvider(), RANGE)
    assert FetchFailure.from_payload(result.error).message == "provider crashed"


def test_results_publish_in_resolution_order():
    bus = EventBus()
    runner = DeferredRunner()
    FetchCoordinator(bus, StaticReportProvider(), runner).attach()
    later = DateRange(date(2020, 3, 5), date(2020, 3, 31))
    bus.publish(ReportEvent.RANGE_CHANGED, RANGE)
    bus.publish(ReportEvent.RANGE_CHANGED, later)
    published = []
    bus.subscribe(ReportEvent.FETCH_COMPLETED, lambda e: published.append(e.payload.start_date))
    runner.resolve(1)
    runner.resolve(0)
    assert published == [later.start_date, RANGE.start_date]
