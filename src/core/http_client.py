"""HTTP client utilities with simple retry logic.

Thin wrapper around ``httpx`` returning decoded JSON. Kept separate from the
report provider so transports can be swapped (tests inject a
``httpx.MockTransport`` through the ``client`` argument).
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

import httpx

from config import settings

_logger = logging.getLogger(__name__)


class HttpError(RuntimeError):
    """Transport or protocol failure.

    ``status_code`` and ``payload`` are populated when the server answered
    with an error status; ``payload`` holds the decoded JSON body if any.
    """

    def __init__(
        self, message: str, *, status_code: int | None = None, payload: Any = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


def _decode_error_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


def fetch_json(
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    client: Optional[httpx.Client] = None,
    user_agent: Optional[str] = None,
    timeout: Optional[float] = None,
    retries: int | None = None,
    backoff_factor: float | None = None,
) -> Any:
    """GET ``url`` and return the decoded JSON body.

    Connection errors and timeouts are retried with exponential backoff.
    Error statuses are not retried: a 4xx/5xx answer is a definitive reply
    and is raised as ``HttpError`` carrying the decoded body.
    """
    ua = user_agent or settings.DEFAULT_USER_AGENT
    timeout = timeout or settings.DEFAULT_TIMEOUT
    retries = retries if retries is not None else settings.DEFAULT_RETRIES
    backoff_factor = (
        backoff_factor if backoff_factor is not None else settings.DEFAULT_BACKOFF_FACTOR
    )

    close_client = False
    if client is None:
        client = httpx.Client(headers={"User-Agent": ua}, timeout=timeout)
        close_client = True
    try:
        attempt = 0
        while True:
            attempt += 1
            try:
                resp = client.get(url, params=params)
            except httpx.TransportError as e:
                if attempt > retries:
                    raise HttpError(
                        f"Failed to fetch {url} after {retries} retries: {e}"
                    ) from e
                sleep_for = backoff_factor * (2 ** (attempt - 1))
                _logger.warning(
                    "Attempt %d/%d failed for %s: %s. Retrying in %.1fs",
                    attempt,
                    retries,
                    url,
                    e,
                    sleep_for,
                )
                time.sleep(sleep_for)
                continue
            if resp.is_error:
                raise HttpError(
                    f"{resp.status_code} {resp.reason_phrase} for {url}",
                    status_code=resp.status_code,
                    payload=_decode_error_body(resp),
                )
            try:
                return resp.json()
            except ValueError as e:
                raise HttpError(f"Invalid JSON from {url}: {e}") from e
    finally:
        if close_client:
            client.close()
