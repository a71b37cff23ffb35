from datetime import date

from salesreport.app.bootstrap import create_app
from salesreport.services.event_bus import EventBus
from salesreport.services.fetch_coordinator import FetchCoordinator
from salesreport.services.notification_service import RecordingNotificationSink
from salesreport.services.report_provider import HttpReportProvider, StaticReportProvider
from salesreport.viewmodels.report_viewmodel import ReportStatus, ReportViewModel


def test_headless_bootstrap_registers_services():
    ctx = create_app(headless=True)
    assert ctx.qt_app is None
    assert isinstance(ctx.services.get("event_bus"), EventBus)
    assert isinstance(ctx.provider, HttpReportProvider)
    assert isinstance(ctx.services.get("notification_sink"), RecordingNotificationSink)
    assert isinstance(ctx.services.get("fetch_coordinator"), FetchCoordinator)
    assert ctx.coordinator.attached
    assert ctx.logging_service.attached


def test_bootstrap_replaces_previous_coordinator():
    first = create_app(headless=True, provider=StaticReportProvider())
    second = create_app(headless=True, provider=StaticReportProvider())
    assert not first.coordinator.attached
    assert second.coordinator.attached
    assert second.event_bus is not first.event_bus


def test_end_to_end_headless_flow(sample_rows):
    provider = StaticReportProvider(sample_rows)
    ctx = create_app(headless=True, provider=provider)
    vm = ReportViewModel()  # resolves bus and sink from the service locator
    vm.load()
    assert vm.status is ReportStatus.READY
    assert [r["salesRepName"] for r in vm.rows] == ["Bob", "Ada", "Cy"]
    vm.on_date_field_change("startDate", "2020-03-10")
    assert provider.calls[-1] == (date(2020, 3, 10), date(2020, 3, 31))
    assert not vm.is_loading

    provider.error = "timeout"
    vm.on_date_field_change("endDate", "2020-03-25")
    assert vm.status is ReportStatus.ERROR
    assert not vm.is_loading
    assert [r["salesRepName"] for r in vm.rows] == ["Bob", "Ada", "Cy"]
    assert ctx.notification_sink.notifications[-1].title == "timeout"
    vm.dispose()
