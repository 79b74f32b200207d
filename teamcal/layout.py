"""
Month layout aggregation.

Combines grid, week selection, lane assignment and progress fill into one
immutable MonthLayout. The whole pass is a pure function of
(year, month, week_start, events): the same inputs always give an equal
result, which is what LayoutCache relies on.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import replace
from typing import Any, Hashable, Iterable, Optional, Sequence

from teamcal.grid import SUNDAY, build_month_grid
from teamcal.model import Event, MonthLayout, PositionedEvent, WeekLayout, WeekWindow
from teamcal.progress import fill_percent
from teamcal.selection import select_week_events
from teamcal.slots import assign_slots, clip_to_week

logger = logging.getLogger(__name__)


def build_week_layout(window: WeekWindow, events: Iterable[Event]) -> WeekLayout:
    selected, skipped = select_week_events(window, events)

    clipped = [clip_to_week(ev, window) for ev in selected]
    packed, total_slots = assign_slots(clipped)

    positioned = tuple(
        replace(p, fill_percent=fill_percent(p.event, window.start, p.start_idx, p.end_idx)) for p in packed
    )
    return WeekLayout(window=window, events=positioned, total_slots=total_slots, skipped=tuple(skipped))


def build_month_layout(
    year: int,
    month: int,
    events: Sequence[Event],
    week_start: int = SUNDAY,
) -> MonthLayout:
    """
    Build the render model for one visible month.
    """
    weeks = tuple(build_week_layout(w, events) for w in build_month_grid(year, month, week_start))

    warnings: list[str] = []
    seen: set[str] = set()
    for w in weeks:
        for ev_id in w.skipped:
            if ev_id in seen:
                continue
            seen.add(ev_id)
            warnings.append(f"Event {ev_id!r} has no usable start/end and is not shown")

    return MonthLayout(year=year, month=month, weeks=weeks, warnings=tuple(warnings))


def label_visible(p: PositionedEvent, day_idx: int) -> bool:
    """
    Whether the bar's title/percentage is drawn on column `day_idx`.

    Only the first visible cell of a bar carries the label, and only where
    the event really starts or where it enters the week on its first day.
    """
    if day_idx != p.start_idx:
        return False
    return not p.is_continues_left or day_idx == 0


def _ts(x: Any) -> str:
    return x.isoformat() if hasattr(x, "isoformat") else repr(x)


def events_fingerprint(events: Iterable[Event]) -> str:
    """
    Stable digest of an event list (order-sensitive, identity-insensitive).
    """
    rows = [
        [ev.id, ev.title, _ts(ev.start), _ts(ev.end), ev.color, ev.completed_units, ev.total_units]
        for ev in events
    ]
    blob = json.dumps(rows, ensure_ascii=False, separators=(",", ":"))
    return hashlib.sha1(blob.encode("utf-8")).hexdigest()


class LayoutCache:
    """
    Memo of finished month layouts keyed by (year, month, week_start, fingerprint).

    Only the latest layout per (year, month, week_start) view is kept: a new
    fingerprint for the same view replaces the old entry. Callers invalidate
    it when the event list changes; the fingerprint in the key still protects
    against a forgotten invalidation.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple, MonthLayout] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def key(self, year: int, month: int, events: Sequence[Event], week_start: int = SUNDAY) -> tuple:
        return (year, month, week_start, events_fingerprint(events))

    def get(self, key: Hashable) -> Optional[MonthLayout]:
        return self._entries.get(key)

    def get_or_build(
        self,
        year: int,
        month: int,
        events: Sequence[Event],
        week_start: int = SUNDAY,
    ) -> MonthLayout:
        k = self.key(year, month, events, week_start)
        cached = self._entries.get(k)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        layout = build_month_layout(year, month, events, week_start)
        self._entries = {old: v for old, v in self._entries.items() if old[:3] != k[:3]}
        self._entries[k] = layout
        logger.debug("Built layout %04d-%02d (%d weeks)", year, month, len(layout.weeks))
        return layout

    def invalidate(self) -> None:
        self._entries.clear()
