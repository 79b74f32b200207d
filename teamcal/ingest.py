"""
Ingestion (API records -> Event objects).

The REST API delivers schedules as JSON objects:

    {
        "schedule_id": 12,
        "title": "Sprint 4",
        "start_time": "2025-03-03T09:00:00Z",
        "end_time": "2025-03-12T18:00:00Z",
        "color": "#f97316",
        "completed_tasks": 3,
        "total_tasks": 8
    }

Records that cannot be turned into an Event (missing id, missing or malformed
timestamps, broken unit counts) are skipped and reported as warnings.
A record whose start lies after its end is a validation error and raises.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from teamcal.model import Event

logger = logging.getLogger(__name__)

ID_KEYS = ("schedule_id", "id")
COMPLETED_KEYS = ("completed_tasks", "completed_units")
TOTAL_KEYS = ("total_tasks", "total_units")


class RecordError(ValueError):
    """A raw record is unusable; the message explains why."""


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp (a trailing 'Z' is accepted).

    Values carrying an offset are converted to UTC and then made naive, so
    all events compare as naive UTC datetimes. Naive values are kept as-is.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            raise RecordError(f"malformed timestamp {value!r}") from None
    else:
        raise RecordError(f"missing timestamp {value!r}")
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _first(rec: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for k in keys:
        if rec.get(k) is not None:
            return rec[k]
    return None


def _units(rec: dict[str, Any], keys: tuple[str, ...]) -> int:
    value = _first(rec, keys)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise RecordError(f"bad unit count {value!r}")
    return value


def event_from_record(rec: dict[str, Any]) -> Event:
    """
    Convert one raw record into an Event.

    Raises RecordError for unusable records and EventValidationError when
    the record is well-formed but start > end.
    """
    if not isinstance(rec, dict):
        raise RecordError(f"record is not an object: {rec!r}")

    ev_id = _first(rec, ID_KEYS)
    if ev_id is None or str(ev_id).strip() == "":
        raise RecordError("missing schedule_id")

    start = parse_timestamp(rec.get("start_time", rec.get("start")))
    end = parse_timestamp(rec.get("end_time", rec.get("end")))

    completed = _units(rec, COMPLETED_KEYS)
    total = _units(rec, TOTAL_KEYS)
    if completed > total:
        raise RecordError(f"completed units {completed} exceed total {total}")

    color = rec.get("color")
    return Event(
        id=str(ev_id).strip(),
        title=str(rec.get("title") or ""),
        start=start,
        end=end,
        color=color if isinstance(color, str) and color.strip() else None,
        completed_units=completed,
        total_units=total,
    )


def events_from_records(records: Iterable[Any]) -> tuple[list[Event], list[str]]:
    """
    Convert many records, skipping the unusable ones.

    Returns (events, warnings).
    """
    events: list[Event] = []
    warnings: list[str] = []
    for i, rec in enumerate(records):
        try:
            events.append(event_from_record(rec))
        except RecordError as e:
            label = _record_label(rec, i)
            msg = f"Skipped {label}: {e}"
            logger.warning(msg)
            warnings.append(msg)
    return events, warnings


def _record_label(rec: Any, index: int) -> str:
    ev_id: Optional[Any] = _first(rec, ID_KEYS) if isinstance(rec, dict) else None
    return f"schedule {ev_id!r}" if ev_id is not None else f"record #{index}"
