"""Report presentation models.

Defines the fixed column schema of the sales rep performance table, the
normalisation applied to rows coming from a provider, and per-column cell
formatting used by the table view.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple

from config import settings
from salesreport.services.date_range import parse_date

__all__ = [
    "ColumnSpec",
    "COLUMNS",
    "column_for",
    "normalize_row",
    "normalize_rows",
    "format_cell",
]

_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


@dataclass(frozen=True)
class ColumnSpec:
    """Static description of one table column.

    Attributes
    ----------
    label: Header text.
    field_name: Row key the column reads.
    type: One of ``text``, ``number``, ``percent``, ``date-local``, ``currency``.
    sortable: Whether clicking the header sorts by this column.
    type_attributes: Formatting options (fraction digits, currency code).
    alignment: ``left`` or ``right`` cell alignment.
    """

    label: str
    field_name: str
    type: str
    sortable: bool = True
    type_attributes: Tuple[Tuple[str, Any], ...] = field(default_factory=tuple)
    alignment: str = "left"

    def attribute(self, name: str, default: Any = None) -> Any:
        return dict(self.type_attributes).get(name, default)


COLUMNS: Tuple[ColumnSpec, ...] = (
    ColumnSpec("Owner", "salesRepName", "text"),
    ColumnSpec(
        "Total Leads",
        "totalLeads",
        "number",
        type_attributes=(("maximumFractionDigits", 0),),
        alignment="right",
    ),
    ColumnSpec(
        "Total Opps.",
        "totalOpps",
        "number",
        type_attributes=(("maximumFractionDigits", 0),),
        alignment="right",
    ),
    ColumnSpec(
        "Conv Rate",
        "conversionRate",
        "percent",
        type_attributes=(("minimumFractionDigits", 2),),
        alignment="right",
    ),
    ColumnSpec("Max Created Date (Opp)", "latestCreatedDate", "date-local", alignment="right"),
    ColumnSpec(
        "Total Val (Opp)",
        "totalValue",
        "currency",
        type_attributes=(("currencyCode", settings.CURRENCY_CODE),),
        alignment="right",
    ),
)

_BY_FIELD: Dict[str, ColumnSpec] = {c.field_name: c for c in COLUMNS}


def column_for(field_name: str) -> Optional[ColumnSpec]:
    return _BY_FIELD.get(field_name)


def _to_number(value: Any) -> Any:
    if isinstance(value, (int, float)) or value is None:
        return value
    try:
        text = str(value).strip()
        return int(text) if text.lstrip("-").isdigit() else float(text)
    except ValueError:
        return value


def normalize_row(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new row dict with typed values for known columns.

    Date columns become ``datetime.date`` so they sort chronologically;
    numeric columns delivered as strings become numbers. Unknown keys are
    copied through untouched and missing keys stay missing.
    """
    row = dict(raw)
    for col in COLUMNS:
        if col.field_name not in row:
            continue
        value = row[col.field_name]
        if col.type == "date-local":
            row[col.field_name] = parse_date(value) if value is not None else None
        elif col.type in ("number", "percent", "currency"):
            row[col.field_name] = _to_number(value)
    return row


def normalize_rows(raw_rows: Any) -> List[Dict[str, Any]]:
    return [normalize_row(r) for r in raw_rows or ()]


def _group(value: float, digits: int) -> str:
    return f"{value:,.{digits}f}"


def format_cell(column: ColumnSpec, value: Any) -> str:
    """Render ``value`` for display in ``column``; blank for missing values."""
    if value is None:
        return ""
    try:
        if column.type == "number":
            digits = column.attribute("maximumFractionDigits", 0)
            return _group(float(value), digits)
        if column.type == "percent":
            digits = column.attribute("minimumFractionDigits", 2)
            return f"{float(value) * 100:.{digits}f}%"
        if column.type == "currency":
            code = column.attribute("currencyCode", settings.CURRENCY_CODE)
            amount = float(value)
            symbol = _CURRENCY_SYMBOLS.get(code)
            text = _group(abs(amount), 2)
            text = f"{symbol}{text}" if symbol else f"{text} {code}"
            return f"-{text}" if amount < 0 else text
        if column.type == "date-local" and isinstance(value, date):
            return f"{value.month}/{value.day}/{value.year}"
    except (TypeError, ValueError):
        pass
    return str(value)
