"""
Central data model definitions used across the layout engine.

This module defines the canonical structure of the objects that flow
through one layout pass:

- Event            one time-ranged schedule entry (read-only input)
- DayCell          one day of the month grid
- WeekWindow       7 consecutive DayCells
- PositionedEvent  one event bar, clipped to a week and assigned a lane
- WeekLayout       all bars of one week plus its lane count
- MonthLayout      the complete render model for one visible month

All of them are frozen so a finished layout can be shared freely while a new
one is being computed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Tuple

DEFAULT_COLOR = "#6366f1"


class EventValidationError(ValueError):
    """Raised when an event violates its own invariants (e.g. start > end)."""


@dataclass(frozen=True)
class Event:
    """
    Represents one schedule entry as delivered by the REST API.

    `start` and `end` are absolute timestamps, `completed_units` and
    `total_units` drive the progress fill of the bar.
    """

    id: str
    title: str
    start: datetime
    end: datetime
    color: Optional[str] = None
    completed_units: int = 0
    total_units: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.start, datetime) and isinstance(self.end, datetime):
            if self.start > self.end:
                raise EventValidationError(f"Event {self.id!r}: start {self.start} is after end {self.end}")
        if self.completed_units < 0 or self.total_units < 0:
            raise EventValidationError(f"Event {self.id!r}: unit counts must be non-negative")
        if self.completed_units > self.total_units:
            raise EventValidationError(
                f"Event {self.id!r}: completed_units {self.completed_units} > total_units {self.total_units}"
            )

    @property
    def display_color(self) -> str:
        return self.color or DEFAULT_COLOR


@dataclass(frozen=True)
class DayCell:
    date: date
    is_current_month: bool

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "is_current_month": self.is_current_month}


@dataclass(frozen=True)
class WeekWindow:
    """
    7 consecutive calendar days, first day always a week-start day.
    """

    days: Tuple[DayCell, ...]

    def __post_init__(self) -> None:
        if len(self.days) != 7:
            raise ValueError(f"A week needs exactly 7 days, got {len(self.days)}")

    @property
    def start(self) -> date:
        return self.days[0].date

    @property
    def end(self) -> date:
        return self.days[-1].date


@dataclass(frozen=True)
class PositionedEvent:
    """
    One event bar inside one week.

    start_idx/end_idx are day columns (0..6) already clipped to the week;
    the continuation flags remember whether the real event reaches past
    the left/right edge of the week.
    """

    event: Event
    start_idx: int
    end_idx: int
    is_continues_left: bool
    is_continues_right: bool
    slot_index: int = 0
    fill_percent: float = 0.0

    @property
    def span(self) -> int:
        return self.end_idx - self.start_idx + 1

    def to_dict(self) -> dict[str, Any]:
        ev = self.event
        return {
            "id": ev.id,
            "title": ev.title,
            "color": ev.display_color,
            "start": ev.start.isoformat(),
            "end": ev.end.isoformat(),
            "start_idx": self.start_idx,
            "end_idx": self.end_idx,
            "span": self.span,
            "is_continues_left": self.is_continues_left,
            "is_continues_right": self.is_continues_right,
            "slot_index": self.slot_index,
            "fill_percent": self.fill_percent,
        }


@dataclass(frozen=True)
class WeekLayout:
    window: WeekWindow
    events: Tuple[PositionedEvent, ...]
    total_slots: int
    # ids of events that had no usable timestamps for this week
    skipped: Tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "days": [d.to_dict() for d in self.window.days],
            "events": [p.to_dict() for p in self.events],
            "total_slots": self.total_slots,
        }


@dataclass(frozen=True)
class MonthLayout:
    year: int
    month: int
    weeks: Tuple[WeekLayout, ...]
    warnings: Tuple[str, ...] = field(default=())

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "weeks": [w.to_dict() for w in self.weeks],
            "warnings": list(self.warnings),
        }
