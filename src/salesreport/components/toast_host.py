"""Toast notification presentation layer.

``ToastHost`` stacks toast widgets in a vertical column; ``NotificationManager``
creates them from the style registry in ``salesreport.design.notifications``,
orders them by stacking priority and runs their auto-dismiss timers.

Usage:
    host = ToastHost(parent_window)
    manager = NotificationManager(host)
    manager.show_notification('error', 'Request timed out', timeout_override_ms=0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from salesreport.design.notifications import get_notification_style

__all__ = ["ToastHost", "NotificationManager", "NotificationData"]


@dataclass
class NotificationData:
    notif_id: int
    style_id: str
    message: str
    timeout_ms: int
    widget: QWidget
    timer: Optional[QTimer]


class ToastHost(QWidget):
    """Container widget stacking toast notifications vertically."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("toastHost")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)
        # Trailing stretch keeps toasts packed at the top
        layout.addStretch(1)

    def add_toast_widget(self, widget: QWidget, insert_index: int) -> None:
        layout = self.layout()
        stretch_pos = layout.count() - 1
        layout.insertWidget(min(insert_index, stretch_pos), widget)

    def remove_toast_widget(self, widget: QWidget) -> None:
        self.layout().removeWidget(widget)
        widget.setParent(None)

    def toast_widgets(self) -> List[QWidget]:
        out: List[QWidget] = []
        for i in range(self.layout().count() - 1):  # skip final stretch
            item = self.layout().itemAt(i)
            if item and item.widget():
                out.append(item.widget())
        return out


class NotificationManager:
    """Creates, orders and dismisses toasts inside a ``ToastHost``.

    ``disable_timers`` keeps every toast alive regardless of timeout, which
    tests use to inspect the stack deterministically.
    """

    def __init__(self, host: ToastHost, *, disable_timers: bool = False) -> None:
        self._host = host
        self._disable_timers = disable_timers
        self._notifications: Dict[int, NotificationData] = {}
        self._next_id = 1

    # Public API --------------------------------------------------
    def show_notification(
        self, style_id: str, message: str, *, timeout_override_ms: Optional[int] = None
    ) -> int:
        style = get_notification_style(style_id)
        timeout_ms = (
            timeout_override_ms if timeout_override_ms is not None else style.default_timeout_ms
        )
        notif_id = self._next_id
        self._next_id += 1
        widget = self._build_toast_widget(notif_id, message)
        widget.setProperty("style_id", style.id)
        widget.setProperty("color_role", style.color_role)
        data = NotificationData(notif_id, style.id, message, timeout_ms, widget, None)
        self._host.add_toast_widget(widget, self._insert_index(style.stacking_priority))
        if timeout_ms > 0 and not self._disable_timers:
            timer = QTimer(widget)
            timer.setSingleShot(True)
            timer.setInterval(timeout_ms)
            timer.timeout.connect(lambda nid=notif_id: self.dismiss(nid))
            timer.start()
            data.timer = timer
        self._notifications[notif_id] = data
        return notif_id

    def dismiss(self, notif_id: int) -> bool:
        data = self._notifications.pop(notif_id, None)
        if not data:
            return False
        if data.timer and data.timer.isActive():
            data.timer.stop()
        self._host.remove_toast_widget(data.widget)
        return True

    def active_ids(self) -> List[int]:
        return sorted(self._notifications.keys())

    def get(self, notif_id: int) -> Optional[NotificationData]:
        return self._notifications.get(notif_id)

    def clear(self) -> None:
        for nid in list(self._notifications.keys()):
            self.dismiss(nid)

    # Internals ---------------------------------------------------
    def _insert_index(self, priority: int) -> int:
        return sum(
            1
            for d in self._notifications.values()
            if get_notification_style(d.style_id).stacking_priority <= priority
        )

    def _build_toast_widget(self, notif_id: int, message: str) -> QWidget:
        w = QWidget(self._host)
        w.setObjectName("toastWidget")
        w.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        hl = QHBoxLayout(w)
        hl.setContentsMargins(12, 8, 12, 8)
        hl.setSpacing(8)
        label = QLabel(message)
        label.setObjectName("toastMessage")
        label.setWordWrap(True)
        hl.addWidget(label)
        close_btn = QPushButton("✕")
        close_btn.setObjectName("toastCloseButton")
        close_btn.setFixedSize(20, 20)
        close_btn.clicked.connect(lambda _=False, nid=notif_id: self.dismiss(nid))
        hl.addWidget(close_btn, alignment=Qt.AlignmentFlag.AlignTop)
        return w
