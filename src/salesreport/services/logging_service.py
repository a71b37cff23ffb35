"""Logging service.

In-process logging handler capturing recent log records into a ring buffer
and emitting ``ReportEvent.LOG_RECORD_ADDED`` on the EventBus so a diagnostics
panel (or a test) can follow fetch activity without scraping stderr.

The event is published synchronously on the logging thread. Records logged by
a ``FetchWorker`` therefore reach subscribers off the UI thread; a Qt consumer
has to re-emit them through a queued signal before updating widgets.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, List, Optional

from .event_bus import EventBus, ReportEvent
from .service_locator import services

__all__ = [
    "LogEntry",
    "LoggingService",
    "get_logging_service",
]


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = 500, *, level: int | str = logging.DEBUG) -> None:
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(level)
        self._attached = False

    # Lifecycle --------------------------------------------------------
    def attach_root(self) -> None:
        if self._attached:
            return
        root = logging.getLogger()
        root.addHandler(self._handler)
        if root.level > self._handler.level:
            root.setLevel(self._handler.level)
        self._attached = True

    def detach_root(self) -> None:
        if not self._attached:
            return
        logging.getLogger().removeHandler(self._handler)
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    # Internal ingestion -----------------------------------------------
    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)
        bus = services.try_get("event_bus")
        if isinstance(bus, EventBus):
            bus.publish(
                ReportEvent.LOG_RECORD_ADDED,
                {"level": entry.level, "name": entry.name, "message": entry.message[:120]},
            )

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def get_logging_service() -> LoggingService:
    return services.get_typed("logging_service", LoggingService)
