"""
teamcal – month layout engine for the team dashboard calendar.
"""

from teamcal.grid import build_month_grid, month_days, next_month, prev_month
from teamcal.ingest import event_from_record, events_from_records
from teamcal.layout import LayoutCache, build_month_layout, build_week_layout, events_fingerprint, label_visible
from teamcal.model import (
    DEFAULT_COLOR,
    DayCell,
    Event,
    EventValidationError,
    MonthLayout,
    PositionedEvent,
    WeekLayout,
    WeekWindow,
)
from teamcal.progress import completion_ratio, fill_percent
from teamcal.selection import select_week_events
from teamcal.slots import assign_slots, clip_to_week
from teamcal.store import EventStore

__all__ = [
    "DEFAULT_COLOR",
    "DayCell",
    "Event",
    "EventStore",
    "EventValidationError",
    "LayoutCache",
    "MonthLayout",
    "PositionedEvent",
    "WeekLayout",
    "WeekWindow",
    "assign_slots",
    "build_month_grid",
    "build_month_layout",
    "build_week_layout",
    "clip_to_week",
    "completion_ratio",
    "event_from_record",
    "events_from_records",
    "events_fingerprint",
    "fill_percent",
    "label_visible",
    "month_days",
    "next_month",
    "prev_month",
    "select_week_events",
]
