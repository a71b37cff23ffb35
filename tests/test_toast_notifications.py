from salesreport.components.toast_host import NotificationManager, ToastHost
from salesreport.services.notification_service import ToastNotificationSink


def test_toast_stacking_and_dismissal(qtbot):
    host = ToastHost()
    qtbot.addWidget(host)
    manager = NotificationManager(host, disable_timers=True)
    info_id = manager.show_notification("info", "Informational message")
    err_id = manager.show_notification("error", "Error message")
    assert manager.active_ids() == sorted([info_id, err_id])
    # error (priority 20) stacks before info (priority 50)
    assert host.toast_widgets()[0].property("style_id") == "error"
    assert manager.dismiss(err_id)
    assert not manager.dismiss(err_id)
    assert manager.active_ids() == [info_id]
    manager.clear()
    assert host.toast_widgets() == []


def test_sticky_sink_creates_toast_without_timer(qtbot):
    host = ToastHost()
    qtbot.addWidget(host)
    manager = NotificationManager(host)
    ToastNotificationSink(manager).notify("timeout", "error", "sticky")
    (nid,) = manager.active_ids()
    data = manager.get(nid)
    assert data.message == "timeout"
    assert data.timeout_ms == 0
    assert data.timer is None


def test_dismissible_toast_auto_dismisses(qtbot):
    host = ToastHost()
    qtbot.addWidget(host)
    manager = NotificationManager(host)
    manager.show_notification("info", "bye", timeout_override_ms=20)
    qtbot.waitUntil(lambda: manager.active_ids() == [], timeout=2000)
