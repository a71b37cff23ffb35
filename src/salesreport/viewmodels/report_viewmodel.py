"""ViewModel for the Sales Rep Performance report.

State lives in an immutable ``ReportState``; every user or provider event is
an action folded into it by the pure ``reduce`` function. ``ReportViewModel``
owns the current state and performs the two side effects:

 - publishing ``ReportEvent.RANGE_CHANGED`` whenever the date range changes
   (some other component performs the fetch);
 - turning failed fetches into a sticky error notification.

It answers ``ReportEvent.FETCH_COMPLETED`` with whatever result arrives; no
attempt is made to discard results for an older range.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple, Union

from config import settings
from salesreport.models import COLUMNS, ColumnSpec
from salesreport.services.date_range import (
    DateRange,
    RangeEdge,
    clamp_range_to_window,
    parse_date,
)
from salesreport.services.event_bus import Event, EventBus, ReportEvent
from salesreport.services.notification_service import (
    NotificationSink,
    RecordingNotificationSink,
)
from salesreport.services.report_provider import FetchFailure, FetchResult
from salesreport.services.row_sort import Row, SortDirection, sort_rows
from salesreport.services.service_locator import services

__all__ = [
    "ReportStatus",
    "ReportState",
    "SortRequested",
    "DateFieldChanged",
    "FetchCompleted",
    "reduce",
    "ReportViewModel",
]

_logger = logging.getLogger(__name__)


class ReportStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class ReportState:
    start_date: date
    end_date: date
    min_start_date: date
    max_start_date: date
    min_end_date: date
    max_end_date: date
    rows: Tuple[Row, ...] = ()
    sorted_by: str = settings.DEFAULT_SORT_FIELD
    sort_direction: SortDirection = SortDirection(settings.DEFAULT_SORT_DIRECTION)
    status: ReportStatus = ReportStatus.LOADING
    last_error: Optional[str] = None
    window_days: int = settings.DATE_WINDOW_DAYS

    @classmethod
    def initial(
        cls,
        start_date: date = settings.DEFAULT_START_DATE,
        end_date: date = settings.DEFAULT_END_DATE,
        *,
        sorted_by: str = settings.DEFAULT_SORT_FIELD,
        sort_direction: SortDirection | str = settings.DEFAULT_SORT_DIRECTION,
        window_days: int = settings.DATE_WINDOW_DAYS,
    ) -> "ReportState":
        """Default state: loading, both pickers limited to ``[start, end]``."""
        if start_date > end_date or (end_date - start_date).days > window_days:
            raise ValueError(
                f"Initial range {start_date}..{end_date} violates the {window_days}-day window"
            )
        return cls(
            start_date=start_date,
            end_date=end_date,
            min_start_date=start_date,
            max_start_date=end_date,
            min_end_date=start_date,
            max_end_date=end_date,
            sorted_by=sorted_by,
            sort_direction=SortDirection.coerce(sort_direction),
            window_days=window_days,
        )

    @property
    def is_loading(self) -> bool:
        return self.status is ReportStatus.LOADING

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)


# Actions ---------------------------------------------------------------


@dataclass(frozen=True)
class SortRequested:
    field_name: str
    direction: Union[SortDirection, str, int] = SortDirection.ASC


@dataclass(frozen=True)
class DateFieldChanged:
    which: Union[RangeEdge, str]
    value: Any


@dataclass(frozen=True)
class FetchCompleted:
    result: FetchResult


Action = Union[SortRequested, DateFieldChanged, FetchCompleted]


# Reducer ---------------------------------------------------------------


def _clamp(value: date, low: date, high: date) -> date:
    return max(low, min(value, high))


def _edit_start(state: ReportState, new_start: date) -> ReportState:
    min_end, max_end = clamp_range_to_window(new_start, RangeEdge.START, state.window_days)
    changes: dict[str, Any] = dict(
        start_date=new_start, min_end_date=min_end, max_end_date=max_end
    )
    end = _clamp(state.end_date, min_end, max_end)
    if end != state.end_date:
        # End fell outside the new window: pull it in and re-derive its pairing
        min_start, max_start = clamp_range_to_window(end, RangeEdge.END, state.window_days)
        changes.update(end_date=end, min_start_date=min_start, max_start_date=max_start)
    return replace(state, **changes)


def _edit_end(state: ReportState, new_end: date) -> ReportState:
    min_start, max_start = clamp_range_to_window(new_end, RangeEdge.END, state.window_days)
    changes: dict[str, Any] = dict(
        end_date=new_end, min_start_date=min_start, max_start_date=max_start
    )
    start = _clamp(state.start_date, min_start, max_start)
    if start != state.start_date:
        min_end, max_end = clamp_range_to_window(start, RangeEdge.START, state.window_days)
        changes.update(start_date=start, min_end_date=min_end, max_end_date=max_end)
    return replace(state, **changes)


def _coerce_edge(which: RangeEdge | str) -> Optional[RangeEdge]:
    if isinstance(which, RangeEdge):
        return which
    text = str(which)
    for edge in RangeEdge:
        if text in (edge.value, edge.name.lower()):
            return edge
    return None


def reduce(state: ReportState, action: Action) -> ReportState:
    """Return the state following ``action``; ``state`` itself is untouched."""
    if isinstance(action, SortRequested):
        try:
            direction = SortDirection.coerce(action.direction)
        except ValueError:
            return state
        return replace(
            state,
            rows=tuple(sort_rows(state.rows, action.field_name, direction)),
            sorted_by=action.field_name,
            sort_direction=direction,
        )

    if isinstance(action, DateFieldChanged):
        edge = _coerce_edge(action.which)
        new_date = parse_date(action.value)
        if edge is None or new_date is None:
            return state
        if edge is RangeEdge.START:
            if new_date == state.start_date:
                return state
            edited = _edit_start(state, new_date)
        else:
            if new_date == state.end_date:
                return state
            edited = _edit_end(state, new_date)
        return replace(edited, status=ReportStatus.LOADING)

    if isinstance(action, FetchCompleted):
        result = action.result
        if result.error is not None:
            failure = FetchFailure.from_payload(result.error)
            return replace(state, status=ReportStatus.ERROR, last_error=failure.message)
        if result.data is not None:
            rows = sort_rows(result.data, state.sorted_by, state.sort_direction)
            return replace(state, rows=tuple(rows), status=ReportStatus.READY, last_error=None)
        return state

    raise TypeError(f"Unsupported action: {action!r}")


# Controller ------------------------------------------------------------

StateListener = Callable[[ReportState], None]


class ReportViewModel:
    """Stateful wrapper around ``reduce`` wired to the event bus.

    Call ``load()`` once the view is ready to request the initial range.
    """

    columns: Tuple[ColumnSpec, ...] = COLUMNS

    def __init__(
        self,
        event_bus: EventBus | None = None,
        notification_sink: NotificationSink | None = None,
        *,
        state: ReportState | None = None,
    ) -> None:
        self._bus: EventBus = event_bus or services.try_get("event_bus") or EventBus()
        self._sink: NotificationSink = (
            notification_sink
            or services.try_get("notification_sink")
            or RecordingNotificationSink()
        )
        self.state = state or ReportState.initial()
        self._listeners: List[StateListener] = []
        self._subscription = self._bus.subscribe(
            ReportEvent.FETCH_COMPLETED, self._on_fetch_completed
        )

    # Wiring --------------------------------------------------------------
    def load(self) -> None:
        """Request data for the current range."""
        self._bus.publish(ReportEvent.RANGE_CHANGED, self.state.date_range)

    def dispose(self) -> None:
        self._bus.unsubscribe(self._subscription)
        self._listeners.clear()

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    # Mutation entry points ----------------------------------------------
    def on_sort(self, field_name: str, direction: SortDirection | str | int) -> None:
        previous = self.state
        if self.dispatch(SortRequested(field_name, direction)) is previous:
            return
        self._bus.publish(
            ReportEvent.SORT_CHANGED,
            {"sorted_by": self.state.sorted_by, "direction": self.state.sort_direction.value},
        )

    def on_date_field_change(self, which: RangeEdge | str, value: Any) -> None:
        self.dispatch(DateFieldChanged(which, value))

    def dispatch(self, action: Action) -> ReportState:
        previous = self.state
        self.state = reduce(previous, action)
        if self.state is previous:
            _logger.debug("Ignored %s (no state change)", type(action).__name__)
            return self.state
        if self.state.date_range != previous.date_range:
            _logger.info(
                "Report range changed to %s..%s", self.state.start_date, self.state.end_date
            )
            self._bus.publish(ReportEvent.RANGE_CHANGED, self.state.date_range)
        for listener in list(self._listeners):
            listener(self.state)
        self._bus.publish(ReportEvent.STATE_CHANGED, self.state)
        if isinstance(action, FetchCompleted) and self.state.status is ReportStatus.ERROR:
            _logger.warning("Report fetch failed: %s", self.state.last_error)
            self._notify_error(self.state.last_error or FetchFailure.DEFAULT_MESSAGE)
        return self.state

    def _notify_error(self, message: str) -> None:
        # Runs after rendering; sink failures are logged, never raised
        try:
            self._sink.notify(message, "error", "sticky")
        except Exception:  # noqa: BLE001
            _logger.exception("Notification sink failed for %r", message)

    def _on_fetch_completed(self, event: Event) -> None:
        if isinstance(event.payload, FetchResult):
            self.dispatch(FetchCompleted(event.payload))

    # Rendering surface ---------------------------------------------------
    @property
    def rows(self) -> List[Row]:
        return list(self.state.rows)

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def status(self) -> ReportStatus:
        return self.state.status

    @property
    def sorted_by(self) -> str:
        return self.state.sorted_by

    @property
    def sort_direction(self) -> str:
        return self.state.sort_direction.value

    @property
    def start_date(self) -> str:
        return self.state.start_date.isoformat()

    @property
    def end_date(self) -> str:
        return self.state.end_date.isoformat()

    @property
    def min_start_date(self) -> str:
        return self.state.min_start_date.isoformat()

    @property
    def max_start_date(self) -> str:
        return self.state.max_start_date.isoformat()

    @property
    def min_end_date(self) -> str:
        return self.state.min_end_date.isoformat()

    @property
    def max_end_date(self) -> str:
        return self.state.max_end_date.isoformat()
