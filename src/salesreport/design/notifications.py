"""Notification style registry.

Semantic description of the toast variants the report viewer can raise and of
the presentation modes a caller may request. Data only; widgets live in
``salesreport.components.toast_host``.

Timeout of 0 means the toast stays until the user closes it. The ``sticky``
mode forces that regardless of the variant's default timeout.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

__all__ = [
    "NotificationMode",
    "NotificationStyle",
    "list_notification_styles",
    "get_notification_style",
    "resolve_timeout_ms",
]


class NotificationMode(str, Enum):
    DISMISSIBLE = "dismissible"  # auto-dismiss after the style timeout, closable
    PESTER = "pester"  # auto-dismiss after the style timeout
    STICKY = "sticky"  # stays until closed


@dataclass(frozen=True)
class NotificationStyle:
    """Semantic notification style definition.

    Attributes
    ----------
    id: Variant identifier (info|success|warning|error).
    color_role: Abstract color role token used by QSS.
    default_timeout_ms: Auto-dismiss time in milliseconds (0 = persist).
    stacking_priority: Lower values stack nearer to the top.
    """

    id: str
    color_role: str
    default_timeout_ms: int
    stacking_priority: int


_REGISTRY: Dict[str, NotificationStyle] = {}


def _register(ns: NotificationStyle) -> None:
    if ns.id in _REGISTRY:
        raise ValueError(f"Duplicate notification style id: {ns.id}")
    _REGISTRY[ns.id] = ns


_register(NotificationStyle("info", "alert-info", 5000, 50))
_register(NotificationStyle("success", "alert-success", 4000, 40))
_register(NotificationStyle("warning", "alert-warning", 8000, 30))
_register(NotificationStyle("error", "alert-error", 8000, 20))


def list_notification_styles() -> List[NotificationStyle]:
    """Return styles sorted by ascending stacking_priority then id."""
    return sorted(_REGISTRY.values(), key=lambda n: (n.stacking_priority, n.id))


def get_notification_style(style_id: str) -> NotificationStyle:
    ns = _REGISTRY.get(style_id)
    if ns is None:
        raise KeyError(f"Unknown notification style id: {style_id}")
    return ns


def resolve_timeout_ms(style_id: str, mode: NotificationMode | str) -> int:
    if NotificationMode(mode) is NotificationMode.STICKY:
        return 0
    return get_notification_style(style_id).default_timeout_ms
