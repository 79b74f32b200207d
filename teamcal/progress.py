"""
Progress fill of an event bar.

The completion ratio (completed_units / total_units) is mapped to a point in
time between the event's start and end. The bar segment of the current week
is filled up to that point, so a multi-week event advances week by week.

Full completion always fills the whole bar, whatever the time-based
branch would say.
"""

from __future__ import annotations

from datetime import date, timedelta

from teamcal.model import Event
from teamcal.selection import day_end, day_start


def completion_ratio(ev: Event) -> float:
    if ev.total_units <= 0:
        return 0.0
    return ev.completed_units / ev.total_units


def fill_percent(ev: Event, week_start: date, start_idx: int, end_idx: int) -> float:
    """
    Filled fraction (0..100) of the bar covering columns start_idx..end_idx
    of the week beginning on `week_start`.
    """
    ratio = completion_ratio(ev)
    if ratio == 1:
        return 100.0

    progress_time = ev.start + (ev.end - ev.start) * ratio

    tz = ev.start.tzinfo
    clip_start = day_start(week_start + timedelta(days=start_idx), tz)
    clip_end = day_end(week_start + timedelta(days=end_idx), tz)

    if progress_time < clip_start:
        return 0.0
    if progress_time > clip_end:
        return 100.0
    return (progress_time - clip_start) / (clip_end - clip_start) * 100
