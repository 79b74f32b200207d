"""
Lane (slot) assignment for one week.

Each event of a week is reduced to a column range [start_idx, end_idx] and
packed into the lowest-numbered free horizontal lane.

Overlap rule (columns are whole days):
    a.start_idx <= b.end_idx AND b.start_idx <= a.end_idx
i.e. two bars that touch the same day column share that day and conflict.

Events are processed by ascending start timestamp, longer events first on
ties. With that order the greedy "first free lane" scheme uses exactly as many
lanes as the largest number of bars covering one day column.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from teamcal.model import Event, PositionedEvent, WeekWindow


def clip_to_week(ev: Event, window: WeekWindow) -> PositionedEvent:
    """
    Compute the event's column range relative to the week, clipped to 0..6.
    """
    start_idx = (ev.start.date() - window.start).days
    end_idx = (ev.end.date() - window.start).days
    return PositionedEvent(
        event=ev,
        start_idx=max(start_idx, 0),
        end_idx=min(end_idx, 6),
        is_continues_left=start_idx < 0,
        is_continues_right=end_idx > 6,
    )


def _packing_key(p: PositionedEvent) -> tuple:
    ev = p.event
    return (ev.start, -(ev.end - ev.start))


def sort_for_packing(items: Iterable[PositionedEvent]) -> list[PositionedEvent]:
    """
    Ascending start, then descending duration.

    sorted() is stable, so events with identical start and duration keep
    their input order.
    """
    return sorted(items, key=_packing_key)


def assign_slots(items: Iterable[PositionedEvent]) -> tuple[list[PositionedEvent], int]:
    """
    Assign every bar to the first lane whose last bar ends before it starts.

    Returns (positioned bars in packing order, total lane count). The input
    objects are not modified; new PositionedEvents carry the slot_index.
    """
    lane_end: list[int] = []
    out: list[PositionedEvent] = []

    for p in sort_for_packing(items):
        slot = None
        for i, end_idx in enumerate(lane_end):
            # strictly less: ending on the same day counts as overlap
            if end_idx < p.start_idx:
                slot = i
                break

        if slot is None:
            slot = len(lane_end)
            lane_end.append(p.end_idx)
        else:
            lane_end[slot] = p.end_idx

        out.append(replace(p, slot_index=slot))

    return out, len(lane_end)


def max_overlap(items: Sequence[PositionedEvent]) -> int:
    """
    Largest number of bars covering any single day column of the week.
    """
    best = 0
    for col in range(7):
        n = sum(1 for p in items if p.start_idx <= col <= p.end_idx)
        best = max(best, n)
    return best
