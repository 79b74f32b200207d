"""
Week event selection.

An event belongs to a week when its day range touches any of the week's days.
Comparison happens at day granularity: the start is truncated to 00:00:00 and
the end pushed to 23:59:59.999 of its day, so an event touching any hour of a
day occupies the whole day.

Only membership is decided here; the untruncated timestamps stay on the Event
for the progress fill.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Iterable, Optional

from teamcal.model import Event, WeekWindow

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)


def day_start(d: date, tzinfo=None) -> datetime:
    return datetime.combine(d, time.min, tzinfo=tzinfo)


def day_end(d: date, tzinfo=None) -> datetime:
    return datetime.combine(d, END_OF_DAY, tzinfo=tzinfo)


def event_days(ev: Event) -> Optional[tuple[date, date]]:
    """
    (first_day, last_day) of the event, or None when it has no usable timestamps.
    """
    if not isinstance(ev.start, datetime) or not isinstance(ev.end, datetime):
        return None
    return ev.start.date(), ev.end.date()


def overlaps_week(ev: Event, window: WeekWindow) -> bool:
    days = event_days(ev)
    if days is None:
        return False
    first, last = days
    # truncated_start <= week_end AND truncated_end >= week_start
    return first <= window.end and last >= window.start


def select_week_events(window: WeekWindow, events: Iterable[Event]) -> tuple[list[Event], list[str]]:
    """
    Filter `events` down to those overlapping `window`.

    Returns (selected, skipped_ids). Events without usable timestamps never
    overlap anything; their ids are reported so the caller can surface a
    data-quality warning.
    """
    selected: list[Event] = []
    skipped: list[str] = []
    for ev in events:
        if event_days(ev) is None:
            logger.warning("Event %r has no usable start/end, left out of week %s", ev.id, window.start)
            skipped.append(ev.id)
            continue
        if overlaps_week(ev, window):
            selected.append(ev)
    return selected, skipped
