"""Report data providers.

A provider answers ``fetch(start_date, end_date)`` with a ``FetchResult``
holding either the already aggregated rows or an error payload shaped like
``{"body": {"message": "..."}}``. Providers never raise for remote failures;
the error travels inside the result so the controller can surface it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Protocol, runtime_checkable

import httpx

from config import settings
from core.http_client import HttpError, fetch_json
from salesreport.models import normalize_rows
from salesreport.services.date_range import to_iso

__all__ = [
    "FetchResult",
    "FetchFailure",
    "ReportProvider",
    "HttpReportProvider",
    "StaticReportProvider",
    "error_payload",
]

_logger = logging.getLogger(__name__)


class FetchFailure(RuntimeError):
    """A failed report fetch, carrying the message shown to the user."""

    DEFAULT_MESSAGE = "Unknown error"

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload

    @classmethod
    def from_payload(cls, payload: Any) -> "FetchFailure":
        """Extract a display message from a provider error payload.

        Looks at ``payload["body"]["message"]`` first, then
        ``payload["message"]``, then a plain string payload.
        """
        message: Any = None
        if isinstance(payload, Mapping):
            body = payload.get("body")
            if isinstance(body, Mapping):
                message = body.get("message")
            if not message:
                message = payload.get("message")
        elif isinstance(payload, BaseException):
            message = str(payload)
        elif isinstance(payload, str):
            message = payload
        return cls(str(message) if message else cls.DEFAULT_MESSAGE, payload)


def error_payload(message: str, **extra: Any) -> dict[str, Any]:
    """Build the canonical error payload for ``message``."""
    return {"body": {"message": message}, **extra}


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one fetch for the ``[start_date, end_date]`` range.

    Exactly one of ``data`` / ``error`` is normally set. A result with
    neither is treated as "nothing yet" and ignored by the controller.
    """

    start_date: date
    end_date: date
    data: Optional[List[Mapping[str, Any]]] = None
    error: Any = None

    @property
    def ok(self) -> bool:
        return self.data is not None and self.error is None

    @classmethod
    def success(cls, start_date: date, end_date: date, rows: Iterable[Mapping[str, Any]]):
        return cls(start_date=start_date, end_date=end_date, data=list(rows))

    @classmethod
    def failure(cls, start_date: date, end_date: date, error: Any):
        return cls(start_date=start_date, end_date=end_date, error=error)


@runtime_checkable
class ReportProvider(Protocol):
    def fetch(self, start_date: date, end_date: date) -> FetchResult: ...


def _message_from_http_error(exc: HttpError) -> str:
    payload = exc.payload
    # Salesforce style error bodies arrive as a list of {message, errorCode}
    if isinstance(payload, list) and payload and isinstance(payload[0], Mapping):
        payload = payload[0]
    if isinstance(payload, Mapping):
        body = payload.get("body")
        if isinstance(body, Mapping) and body.get("message"):
            return str(body["message"])
        if payload.get("message"):
            return str(payload["message"])
    if isinstance(payload, str) and payload.strip():
        return payload.strip()
    return str(exc)


class HttpReportProvider:
    """Fetch the report from an HTTP endpoint returning a JSON array of rows.

    Query parameters are ``startDate`` and ``endDate`` as ISO dates.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        *,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        backoff_factor: Optional[float] = None,
    ) -> None:
        self.endpoint = endpoint or settings.REPORT_ENDPOINT
        self._client = client
        self._timeout = timeout
        self._retries = retries
        self._backoff = backoff_factor

    def fetch(self, start_date: date, end_date: date) -> FetchResult:
        params = {"startDate": to_iso(start_date), "endDate": to_iso(end_date)}
        _logger.info("Fetching report %s..%s from %s", *params.values(), self.endpoint)
        try:
            payload = fetch_json(
                self.endpoint,
                params=params,
                client=self._client,
                timeout=self._timeout,
                retries=self._retries,
                backoff_factor=self._backoff,
            )
        except HttpError as exc:
            _logger.warning("Report fetch failed: %s", exc)
            return FetchResult.failure(
                start_date,
                end_date,
                error_payload(_message_from_http_error(exc), status=exc.status_code),
            )
        if not isinstance(payload, list):
            _logger.warning("Unexpected report payload type %s", type(payload).__name__)
            return FetchResult.failure(
                start_date, end_date, error_payload("Malformed report response")
            )
        rows = normalize_rows(payload)
        _logger.debug("Fetched %d report rows", len(rows))
        return FetchResult.success(start_date, end_date, rows)


class StaticReportProvider:
    """In-memory provider returning the same rows for any range.

    Useful for demos and tests. Set ``error`` to make every fetch fail with
    that message instead.
    """

    def __init__(
        self, rows: Iterable[Mapping[str, Any]] = (), *, error: str | None = None
    ) -> None:
        self._rows = normalize_rows(list(rows))
        self.error = error
        self.calls: List[tuple[date, date]] = []

    def fetch(self, start_date: date, end_date: date) -> FetchResult:
        self.calls.append((start_date, end_date))
        if self.error is not None:
            return FetchResult.failure(start_date, end_date, error_payload(self.error))
        return FetchResult.success(start_date, end_date, self._rows)
