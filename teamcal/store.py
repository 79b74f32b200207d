"""
In-memory event list for the visible month.

The store keeps the events of the current month snapshot in arrival order and
applies single-event changes coming from API responses or the push channel.
Every change invalidates the layout cache; layouts are then rebuilt on the
next request.

Push notifications understood by apply_notification():

    scheduleAdded           {"schedule": {...}}
    scheduleUpdated         {"schedule": {...}}
    scheduleRemoved         {"scheduleId": 12}
    createTask              {"schedule": {...}}   (optional updated record)
    isTaskCompletedChanged  {"schedule": {...}}
    deleteTask              {"schedule": {...}}
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from teamcal.grid import SUNDAY
from teamcal.ingest import RecordError, event_from_record
from teamcal.layout import LayoutCache
from teamcal.model import Event, MonthLayout

logger = logging.getLogger(__name__)

TASK_NOTIFICATIONS = ("createTask", "isTaskCompletedChanged", "deleteTask")


class EventStore:
    def __init__(self, events: Iterable[Event] = (), cache: Optional[LayoutCache] = None) -> None:
        self._events: list[Event] = list(events)
        self.cache = cache if cache is not None else LayoutCache()
        self.revision = 0

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def _index(self, event_id: str) -> Optional[int]:
        for i, ev in enumerate(self._events):
            if ev.id == event_id:
                return i
        return None

    def _changed(self) -> None:
        self.revision += 1
        self.cache.invalidate()

    def replace(self, events: Iterable[Event]) -> None:
        self._events = list(events)
        self._changed()

    def add(self, event: Event) -> None:
        if self._index(event.id) is not None:
            self.update(event)
            return
        self._events.append(event)
        self._changed()

    def update(self, event: Event) -> None:
        idx = self._index(event.id)
        if idx is None:
            self._events.append(event)
        else:
            self._events[idx] = event
        self._changed()

    def remove(self, event_id: str) -> bool:
        idx = self._index(str(event_id))
        if idx is None:
            return False
        del self._events[idx]
        self._changed()
        return True

    def apply_notification(self, name: str, payload: dict[str, Any]) -> bool:
        """
        Apply one push notification. Returns True when the event list changed.

        Malformed schedule records are logged and ignored; a record with
        start > end raises EventValidationError.
        """
        if not isinstance(payload, dict):
            logger.warning("Ignoring %s with non-object payload: %r", name, payload)
            return False

        if name == "scheduleRemoved":
            ev_id = payload.get("scheduleId")
            if ev_id is None:
                logger.warning("scheduleRemoved without scheduleId: %r", payload)
                return False
            return self.remove(str(ev_id))

        if name in ("scheduleAdded", "scheduleUpdated") or name in TASK_NOTIFICATIONS:
            rec = payload.get("schedule")
            if rec is None:
                # task change without an updated schedule: nothing to re-layout
                logger.debug("%s without schedule record", name)
                return False
            try:
                event = event_from_record(rec)
            except RecordError as e:
                logger.warning("Ignoring %s: %s", name, e)
                return False
            if name == "scheduleAdded":
                self.add(event)
            else:
                self.update(event)
            return True

        logger.warning("Unknown notification %r ignored", name)
        return False

    def layout(self, year: int, month: int, week_start: int = SUNDAY) -> MonthLayout:
        return self.cache.get_or_build(year, month, self._events, week_start)
