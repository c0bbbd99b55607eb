"""httpx-based client for the health-check API.

All methods return records or raise HealthCheckOfflineError / HealthCheckApiError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from teamhealth.records.models import HealthCheckRecord

logger = logging.getLogger(__name__)

API_PATH = "/api/health-checks"


class HealthCheckOfflineError(Exception):
    """Raised when the API is unreachable."""


class HealthCheckApiError(Exception):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API error {status_code}: {message}")


def _error_message(resp: httpx.Response, fallback: str) -> str:
    try:
        error = resp.json().get("error")
    except Exception:
        return fallback
    if not error:
        return fallback
    if isinstance(error, list):
        return "; ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in error)
    return str(error)


class HealthCheckClient:
    """Synchronous httpx client for the health-check API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _request(self, method: str, fallback: str, **kwargs: Any) -> httpx.Response:
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.request(method, f"{self._base_url}{API_PATH}", **kwargs)
        except httpx.ConnectError:
            raise HealthCheckOfflineError("Health check API is offline or unreachable")
        except httpx.TimeoutException:
            raise HealthCheckOfflineError("Health check API request timed out")
        except httpx.HTTPError as exc:
            raise HealthCheckOfflineError(f"Health check API request failed: {exc}")
        if resp.status_code >= 400:
            raise HealthCheckApiError(resp.status_code, _error_message(resp, fallback))
        return resp

    def list(self) -> list[HealthCheckRecord]:
        """GET /api/health-checks"""
        fallback = "Failed to fetch health checks"
        resp = self._request("GET", fallback)
        try:
            return [HealthCheckRecord.from_row(r) for r in resp.json()]
        except (ValueError, TypeError, KeyError, AttributeError):
            raise HealthCheckApiError(resp.status_code, fallback)

    def create(self, name: str, feeling: str, date: str) -> HealthCheckRecord:
        """POST /api/health-checks"""
        fallback = "Failed to submit health check"
        resp = self._request(
            "POST",
            fallback,
            json={"name": name, "feeling": feeling, "date": date},
        )
        try:
            return HealthCheckRecord.from_row(resp.json())
        except (ValueError, TypeError, KeyError, AttributeError):
            raise HealthCheckApiError(resp.status_code, fallback)
