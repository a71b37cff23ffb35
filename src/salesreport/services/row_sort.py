"""Comparator-based row sorting.

``make_comparator`` builds a classic ``(a, b) -> -1/0/1`` ordering function for
one field of a row mapping; ``sort_rows`` applies it through
``functools.cmp_to_key`` so the result inherits the stability of Python's
``sorted``. Rows are never mutated and the input sequence is never reordered.

Values are compared with strict ``>`` / ``<`` only, which keeps the same code
correct for strings, numbers and dates. A missing field, a ``None`` value or
two values of incomparable types compare as equal, so such rows simply keep
their relative input order.
"""

from __future__ import annotations

from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, Mapping

__all__ = ["SortDirection", "Row", "Comparator", "make_comparator", "sort_rows"]

Row = Mapping[str, Any]
Comparator = Callable[[Row, Row], int]

_MISSING = object()


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def sign(self) -> int:
        return 1 if self is SortDirection.ASC else -1

    @classmethod
    def coerce(cls, value: "SortDirection | str | int") -> "SortDirection":
        """Accept an enum member, its wire value ("asc"/"desc") or a sign (1/-1).

        Anything else raises ``ValueError``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls.ASC if value >= 0 else cls.DESC
        return cls(str(value).lower())


def _sign(a: Any, b: Any) -> int:
    if a is _MISSING or b is _MISSING or a is None or b is None:
        return 0
    try:
        return (a > b) - (b > a)
    except TypeError:
        return 0


def make_comparator(field_name: str, direction: SortDirection | str | int) -> Comparator:
    """Return a comparator ordering rows by ``field_name`` in ``direction``."""
    sign = SortDirection.coerce(direction).sign

    def compare(row_a: Row, row_b: Row) -> int:
        return sign * _sign(row_a.get(field_name, _MISSING), row_b.get(field_name, _MISSING))

    return compare


def sort_rows(
    rows: Iterable[Row], field_name: str, direction: SortDirection | str | int
) -> List[Row]:
    """Return a new, stably sorted list of ``rows``."""
    return sorted(rows, key=cmp_to_key(make_comparator(field_name, direction)))
