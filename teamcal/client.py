"""
Month-scoped read from the team REST API.

    GET {base_url}/api/schedules/month?year=2025&month=3
    Authorization: Bearer <token>

Returns the raw schedule records; turning them into Events is done by
teamcal.ingest.
"""

from __future__ import annotations

import os
from typing import Any, Optional

import requests

DEFAULT_API_URL = os.environ.get("TEAMCAL_API_URL", "http://localhost:3000")
MONTH_PATH = "/api/schedules/month"


def default_token() -> Optional[str]:
    return os.environ.get("TEAMCAL_TOKEN") or None


def fetch_month_schedules(
    base_url: str,
    year: int,
    month: int,
    token: Optional[str] = None,
    session: Optional[requests.Session] = None,
    timeout: float = 30,
) -> list[dict[str, Any]]:
    """
    Load all schedules whose range intersects the given month.

    Raises requests.HTTPError for non-2xx answers and ValueError when the
    body is not a JSON list.
    """
    url = base_url.rstrip("/") + MONTH_PATH
    headers = {"Cache-Control": "no-store"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    http = session if session is not None else requests
    resp = http.get(url, params={"year": year, "month": month}, headers=headers, timeout=timeout)
    resp.raise_for_status()

    data = resp.json()
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of schedules from {url}, got {type(data).__name__}")
    return data
