"""
Month grid construction.

Turns a (year, month) pair into whole weeks covering that month. The first
week is backed up to the week-start day, the last week is advanced to the
end of its week, so every week has exactly 7 days.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from teamcal.model import DayCell, WeekWindow

# Python weekday numbers (Mon=0 .. Sun=6)
SUNDAY = calendar.SUNDAY
MONDAY = calendar.MONDAY


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month!r}")


def weekday_index(d: date, week_start: int = SUNDAY) -> int:
    """
    Column of `d` inside its week (0 = week-start day).
    """
    return (d.weekday() - week_start) % 7


def month_days(year: int, month: int, week_start: int = SUNDAY) -> list[DayCell]:
    """
    Flat list of all grid days for the month (always a multiple of 7).
    """
    _check_month(month)
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])

    grid_start = first - timedelta(days=weekday_index(first, week_start))
    grid_end = last + timedelta(days=6 - weekday_index(last, week_start))

    days: list[DayCell] = []
    d = grid_start
    while d <= grid_end:
        days.append(DayCell(date=d, is_current_month=(d.month == month)))
        d += timedelta(days=1)
    return days


def build_month_grid(year: int, month: int, week_start: int = SUNDAY) -> list[WeekWindow]:
    """
    Ordered weeks covering the month, padded with days of adjacent months.
    """
    days = month_days(year, month, week_start)
    return [WeekWindow(days=tuple(days[i : i + 7])) for i in range(0, len(days), 7)]


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    _check_month(month)
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    _check_month(month)
    if month == 12:
        return year + 1, 1
    return year, month + 1
