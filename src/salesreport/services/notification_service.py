"""Notification sinks.

The controller reports failures through ``notify(title, variant, mode)`` and
never looks at the result. ``RecordingNotificationSink`` keeps notifications
in memory (headless runs, tests); ``ToastNotificationSink`` forwards them to
the Qt ``NotificationManager``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Protocol, runtime_checkable

from salesreport.design.notifications import (
    NotificationMode,
    get_notification_style,
    resolve_timeout_ms,
)

if TYPE_CHECKING:  # pragma: no cover
    from salesreport.components.toast_host import NotificationManager

__all__ = [
    "Notification",
    "NotificationSink",
    "RecordingNotificationSink",
    "ToastNotificationSink",
]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    title: str
    variant: str
    mode: str


@runtime_checkable
class NotificationSink(Protocol):
    def notify(self, title: str, variant: str = "info", mode: str = "dismissible") -> None: ...


def _validate(variant: str, mode: str) -> None:
    get_notification_style(variant)
    NotificationMode(mode)


class RecordingNotificationSink:
    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def notify(self, title: str, variant: str = "info", mode: str = "dismissible") -> None:
        _validate(variant, mode)
        self.notifications.append(Notification(title, variant, mode))
        _logger.info("[%s/%s] %s", variant, mode, title)

    def clear(self) -> None:
        self.notifications.clear()


class ToastNotificationSink:
    def __init__(self, manager: "NotificationManager") -> None:
        self._manager = manager

    def notify(self, title: str, variant: str = "info", mode: str = "dismissible") -> None:
        _validate(variant, mode)
        self._manager.show_notification(
            variant, title, timeout_override_ms=resolve_timeout_ms(variant, mode)
        )
