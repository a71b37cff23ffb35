"""EventBus core.

Lightweight synchronous publish/subscribe mechanism with typed events.

The report controller never talks to the fetch mechanism directly: it
publishes ``RANGE_CHANGED`` and listens for ``FETCH_COMPLETED``. Any
subscriber (the fetch coordinator in the app, a fake in tests) can sit on the
other side.

Handlers run synchronously on the publishing thread. A failing handler never
breaks the publish cycle; its exception is recorded in ``errors``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "ReportEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class ReportEvent(str, Enum):  # str subclass for easier logging / comparison
    RANGE_CHANGED = "range_changed"
    FETCH_COMPLETED = "fetch_completed"
    SORT_CHANGED = "sort_changed"
    STATE_CHANGED = "state_changed"
    LOG_RECORD_ADDED = "log_record_added"


@dataclass
class Event:
    name: str  # matches ReportEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | ReportEvent) -> str:
    return name.value if isinstance(name, ReportEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Subscription lists are guarded by a re-entrant lock; handlers are invoked
    while the lock is NOT held so they can publish or (un)subscribe
    recursively. ``FETCH_COMPLETED`` is published on the UI thread (worker
    results are marshalled back via Qt signals first). ``LOG_RECORD_ADDED``
    is published on whichever thread emitted the log record, fetch workers
    included, so its subscribers must not touch widgets directly.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    # Subscription management -----------------------------------------
    def subscribe(
        self, name: str | ReportEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    # Publishing --------------------------------------------------------
    def publish(self, name: str | ReportEvent, payload: Any = None) -> Event:
        evt = Event(name=_key(name), payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(evt.name, ()))
        finished_once: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished_once.append(sub)
        for sub in finished_once:
            self.unsubscribe(sub)
        return evt

    # Introspection -----------------------------------------------------
    def subscriber_count(self, name: str | ReportEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    def list_events(self) -> list[str]:
        with self._lock:
            return list(self._subs.keys())

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
