"""Global configuration and constants for the sales report viewer."""

from __future__ import annotations

import os
from datetime import date
from typing import Final

REPORT_ENDPOINT: Final = os.environ.get(
    "SALESREPORT_ENDPOINT", "http://localhost:8000/api/sales-rep-performance"
)
DEFAULT_USER_AGENT: Final = "SalesReportViewer/0.1"
DEFAULT_TIMEOUT: Final = int(os.environ.get("SALESREPORT_TIMEOUT", "15"))  # seconds
DEFAULT_RETRIES: Final = int(os.environ.get("SALESREPORT_RETRIES", "2"))
DEFAULT_BACKOFF_FACTOR: Final = 0.6
LOG_LEVEL: Final = os.environ.get("SALESREPORT_LOG_LEVEL", "INFO")

# Maximum span between start and end date offered by the pickers
DATE_WINDOW_DAYS: Final = 31
DEFAULT_START_DATE: Final = date(2020, 3, 1)
DEFAULT_END_DATE: Final = date(2020, 3, 31)

DEFAULT_SORT_FIELD: Final = "totalValue"
DEFAULT_SORT_DIRECTION: Final = "desc"
CURRENCY_CODE: Final = "USD"
