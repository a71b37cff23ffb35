"""Date range helpers for the paired start/end pickers.

``add_days`` shifts a date by a signed number of calendar days.
``clamp_range_to_window`` turns one edited edge of the range into the
``(min, max)`` bounds of the other edge, so that whatever the user picks next
keeps ``start <= end`` and ``end - start <= window_days``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Tuple, TypeVar

from config import settings

__all__ = ["RangeEdge", "DateRange", "add_days", "clamp_range_to_window", "parse_date", "to_iso"]

D = TypeVar("D", date, datetime)


class RangeEdge(str, Enum):
    START = "startDate"
    END = "endDate"


@dataclass(frozen=True)
class DateRange:
    start_date: date
    end_date: date

    @property
    def span_days(self) -> int:
        return (self.end_date - self.start_date).days


def add_days(value: D, delta_days: int) -> D:
    """Return ``value`` advanced by ``delta_days`` calendar days (may be negative).

    ``date`` and ``datetime`` are immutable, so the input is never modified;
    month lengths and leap years are handled by ``timedelta`` arithmetic.
    """
    return value + timedelta(days=delta_days)


def clamp_range_to_window(
    anchor: date, edge: RangeEdge | str, window_days: int = settings.DATE_WINDOW_DAYS
) -> Tuple[date, date]:
    """Bounds for the field paired with ``edge`` once it is set to ``anchor``.

    START edited -> bounds of the end date: ``(anchor, anchor + window)``.
    END edited   -> bounds of the start date: ``(anchor - window, anchor)``.
    """
    if window_days < 0:
        raise ValueError(f"window_days must be >= 0, got {window_days}")
    if RangeEdge(edge) is RangeEdge.START:
        return anchor, add_days(anchor, window_days)
    return add_days(anchor, -window_days), anchor


def parse_date(value: object) -> date | None:
    """Coerce picker input to a ``date``; ``None`` when it cannot be read.

    Accepts ``date``, ``datetime`` (time dropped) and ISO strings
    (``YYYY-MM-DD`` or a full ISO timestamp).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def to_iso(value: date) -> str:
    return value.isoformat()
