"""
Unit tests for the month layout aggregation and its cache.
"""

import json
import unittest
from datetime import datetime

from teamcal.grid import MONDAY
from teamcal.layout import LayoutCache, build_month_layout, events_fingerprint, label_visible
from teamcal.model import Event, EventValidationError, PositionedEvent


def _events() -> list[Event]:
    return [
        Event("a", "Alpha", datetime(2025, 3, 10, 9), datetime(2025, 3, 12, 17), "#f97316", 1, 4),
        Event("b", "Beta", datetime(2025, 3, 11, 9), datetime(2025, 3, 13, 17)),
        Event("c", "Gamma", datetime(2025, 3, 12, 9), datetime(2025, 3, 12, 17), None, 2, 2),
        Event("long", "Release", datetime(2025, 3, 6, 10), datetime(2025, 3, 18, 15), None, 3, 10),
        Event("old", "January", datetime(2025, 1, 2), datetime(2025, 1, 3)),
    ]


class TestMonthLayout(unittest.TestCase):
    def test_structure(self) -> None:
        layout = build_month_layout(2025, 3, _events())
        self.assertEqual((layout.year, layout.month), (2025, 3))
        self.assertEqual(len(layout.weeks), 6)
        for week in layout.weeks:
            self.assertEqual(len(week.window.days), 7)
            ids = [p.event.id for p in week.events]
            self.assertNotIn("old", ids)

    def test_week_of_march_9(self) -> None:
        week = build_month_layout(2025, 3, _events()).weeks[2]
        by_id = {p.event.id: p for p in week.events}

        self.assertEqual(set(by_id), {"a", "b", "c", "long"})
        # "long" starts earliest, so it takes lane 0 and pushes the others down
        self.assertEqual(by_id["long"].slot_index, 0)
        self.assertEqual([by_id[x].slot_index for x in ("a", "b", "c")], [1, 2, 3])
        self.assertEqual(week.total_slots, 4)

        long_bar = by_id["long"]
        self.assertTrue(long_bar.is_continues_left)
        self.assertTrue(long_bar.is_continues_right)
        self.assertEqual((long_bar.start_idx, long_bar.end_idx, long_bar.span), (0, 6, 7))

        self.assertEqual(by_id["c"].fill_percent, 100.0)
        # no units: progress point is the start time, Tue 09:00 of a Tue-Thu bar
        self.assertAlmostEqual(by_id["b"].fill_percent, 12.5, places=3)

    def test_multi_week_event_appears_in_each_week(self) -> None:
        layout = build_month_layout(2025, 3, _events())
        segments = [(p.start_idx, p.end_idx) for w in layout.weeks for p in w.events if p.event.id == "long"]
        self.assertEqual(segments, [(4, 6), (0, 6), (0, 2)])

    def test_idempotent(self) -> None:
        first = build_month_layout(2025, 3, _events())
        second = build_month_layout(2025, 3, _events())
        self.assertEqual(first, second)
        self.assertEqual(
            json.dumps(first.to_dict(), sort_keys=True),
            json.dumps(second.to_dict(), sort_keys=True),
        )

    def test_monday_week_start(self) -> None:
        layout = build_month_layout(2025, 3, _events(), week_start=MONDAY)
        week = layout.weeks[2]  # Mon 2025-03-10 .. Sun 2025-03-16
        by_id = {p.event.id: p for p in week.events}
        self.assertEqual((by_id["a"].start_idx, by_id["a"].end_idx), (0, 2))

    def test_unusable_event_becomes_warning(self) -> None:
        events = _events() + [Event("bad", "Broken", None, None)]  # type: ignore[arg-type]
        with self.assertLogs("teamcal.selection", level="WARNING"):
            layout = build_month_layout(2025, 3, events)
        self.assertEqual(len(layout.warnings), 1)
        self.assertIn("'bad'", layout.warnings[0])

    def test_inverted_event_fails_loudly(self) -> None:
        with self.assertRaises(EventValidationError):
            Event("x", "Backwards", datetime(2025, 3, 12), datetime(2025, 3, 10))

    def test_empty_month(self) -> None:
        layout = build_month_layout(2025, 3, [])
        self.assertTrue(all(w.total_slots == 0 and not w.events for w in layout.weeks))


class TestLabelVisibility(unittest.TestCase):
    def _bar(self, start_idx: int, end_idx: int, left: bool) -> PositionedEvent:
        ev = Event("e", "E", datetime(2025, 3, 1), datetime(2025, 3, 20))
        return PositionedEvent(ev, start_idx, end_idx, left, False)

    def test_label_only_on_first_visible_cell(self) -> None:
        bar = self._bar(2, 5, left=False)
        self.assertTrue(label_visible(bar, 2))
        self.assertFalse(label_visible(bar, 3))
        self.assertFalse(label_visible(bar, 5))

    def test_continuation_shows_label_on_first_day_of_week(self) -> None:
        bar = self._bar(0, 6, left=True)
        self.assertTrue(label_visible(bar, 0))
        self.assertFalse(label_visible(bar, 1))


class TestLayoutCache(unittest.TestCase):
    def test_hit_on_identical_inputs(self) -> None:
        cache = LayoutCache()
        first = cache.get_or_build(2025, 3, _events())
        second = cache.get_or_build(2025, 3, _events())  # new list, same content
        self.assertIs(first, second)
        self.assertEqual((cache.hits, cache.misses), (1, 1))
        self.assertEqual(len(cache), 1)

    def test_changed_events_miss(self) -> None:
        cache = LayoutCache()
        events = _events()
        cache.get_or_build(2025, 3, events)
        events[1] = Event("b", "Beta", datetime(2025, 3, 11, 9), datetime(2025, 3, 13, 17), None, 1, 2)
        cache.get_or_build(2025, 3, events)
        self.assertEqual(cache.misses, 2)

    def test_new_fingerprint_replaces_old_entry_for_same_view(self) -> None:
        cache = LayoutCache()
        events = _events()
        for done in range(5):
            events[1] = Event("b", "Beta", datetime(2025, 3, 11, 9), datetime(2025, 3, 13, 17), None, done, 4)
            cache.get_or_build(2025, 3, events)
        self.assertEqual(len(cache), 1)
        self.assertEqual(cache.misses, 5)

        cache.get_or_build(2025, 4, events)
        cache.get_or_build(2025, 3, events, week_start=MONDAY)
        self.assertEqual(len(cache), 3)

    def test_invalidate(self) -> None:
        cache = LayoutCache()
        cache.get_or_build(2025, 3, _events())
        cache.get_or_build(2025, 4, _events())
        self.assertEqual(len(cache), 2)
        cache.invalidate()
        self.assertEqual(len(cache), 0)

    def test_fingerprint_is_content_based(self) -> None:
        self.assertEqual(events_fingerprint(_events()), events_fingerprint(_events()))
        self.assertNotEqual(events_fingerprint(_events()), events_fingerprint(_events()[:-1]))


if __name__ == "__main__":
    unittest.main()
