"""Top-level window hosting the report view and its toast column."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtWidgets import QHBoxLayout, QMainWindow, QWidget

from salesreport.app.bootstrap import AppContext
from salesreport.components.toast_host import NotificationManager, ToastHost
from salesreport.services.notification_service import ToastNotificationSink
from salesreport.viewmodels.report_viewmodel import ReportViewModel
from salesreport.views.report_view import ReportView

__all__ = ["ReportWindow"]


class ReportWindow(QMainWindow):
    def __init__(self, ctx: AppContext, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Sales Rep Performance Report")
        central = QWidget(self)
        layout = QHBoxLayout(central)
        self.toast_host = ToastHost(central)
        self.toast_host.setFixedWidth(280)
        self.notifications = NotificationManager(self.toast_host)
        ctx.set_notification_sink(ToastNotificationSink(self.notifications))
        self.viewmodel = ReportViewModel(ctx.event_bus, ctx.notification_sink)
        self.report_view = ReportView(self.viewmodel, central)
        layout.addWidget(self.report_view, 1)
        layout.addWidget(self.toast_host)
        self.setCentralWidget(central)
        self.resize(1100, 600)

    def closeEvent(self, event):  # type: ignore[override]
        self.viewmodel.dispose()
        super().closeEvent(event)
