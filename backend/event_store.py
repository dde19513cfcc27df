"""
event_store.py
──────────────
The canonical, order-preserving list of calendar events.

Adding a recurring event stores the whole expanded series; deleting
removes either one event or a whole series depending on the target's role.
A single threading.Lock per store serialises writers.
"""

import logging
import threading
from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import ValidationError

from conflicts import find_conflicts, overlaps
from date_utils import month_bounds, same_day
from exceptions import EventNotFound, InvalidEvent
from models import ConflictCheck, Event, EventCreate, EventUpdate, new_event_id
from recurrence import expand
from storage import JsonEventStorage

_LOGGER = logging.getLogger(__name__)


class EventStore:
    """
    Holds events in memory and, when given a storage backend, mirrors
    every mutation to it.
    """

    def __init__(self, storage: Optional[JsonEventStorage] = None):
        self._events: List[Event] = []
        self._lock = threading.Lock()
        self._storage = storage

        self._load()

    # ── Mutations ─────────────────────────────────────────────────────────────

    def add(self, form: EventCreate, now: Optional[datetime] = None) -> List[Event]:
        """Create an event; recurring ones are stored with their whole series."""
        with self._lock:
            base = self._validated({**form.model_dump(), "id": self._next_id()})
            series = expand(base, now) if base.is_recurring else [base]
            self._events.extend(series)
            self._persist()
        _LOGGER.info("Added event %s (%d stored)", base.id, len(series))
        return series

    def update(self, event_id: str, patch: EventUpdate) -> Event:
        """Merge the fields set on `patch` into one event."""
        changes = patch.model_dump(exclude_unset=True)
        with self._lock:
            idx = self._index(event_id)
            current = self._events[idx]
            updated = self._validated({**current.model_dump(), **changes})
            self._events[idx] = updated
            self._persist()
        _LOGGER.info("Updated event %s (%s)", event_id, ", ".join(sorted(changes)) or "no changes")
        return updated

    def move(self, event_id: str, new_date: date) -> Event:
        """Reschedule onto another day, keeping time of day and duration."""
        with self._lock:
            idx = self._index(event_id)
            current = self._events[idx]
            start = datetime.combine(new_date, current.start_time.time())
            updated = current.model_copy(update={
                "start_time": start,
                "end_time":   start + current.duration,
            })
            self._events[idx] = updated
            self._persist()
        _LOGGER.info("Moved event %s to %s", event_id, new_date.isoformat())
        return updated

    def delete(self, event_id: str) -> List[Event]:
        """
        Remove an event and return everything that went with it.

        A generated instance goes alone, a recurring base event takes its
        whole series, and a plain event goes alone.
        """
        with self._lock:
            target = self._events[self._index(event_id)]
            doomed = {event_id}
            if target.is_recurring and not target.is_instance:
                doomed.update(ev.id for ev in self._events if ev.parent_event_id == event_id)
            removed = [ev for ev in self._events if ev.id in doomed]
            self._events = [ev for ev in self._events if ev.id not in doomed]
            self._persist()
        _LOGGER.info("Deleted event %s (%d removed)", event_id, len(removed))
        return removed

    # ── Queries ───────────────────────────────────────────────────────────────

    def all(self) -> List[Event]:
        with self._lock:
            return list(self._events)

    def get(self, event_id: str) -> Event:
        with self._lock:
            return self._events[self._index(event_id)]

    def query_by_date(self, day: date) -> List[Event]:
        """Events starting on the given calendar day."""
        return [ev for ev in self.all() if same_day(ev.start_time, day)]

    def query_range(self, start: datetime, end: datetime) -> List[Event]:
        """Events overlapping the half-open window [start, end)."""
        return [ev for ev in self.all() if overlaps(ev.start_time, ev.end_time, start, end)]

    def query_month(self, year: int, month: int) -> List[Event]:
        return self.query_range(*month_bounds(year, month))

    def search(self, text: str) -> List[Event]:
        """Case-insensitive match against title or description."""
        needle = (text or "").lower()
        return [
            ev for ev in self.all()
            if needle in ev.title.lower() or needle in ev.description.lower()
        ]

    def query_conflicts(self, candidate: Union[Event, ConflictCheck]) -> List[Event]:
        return find_conflicts(candidate, self.all())

    # ── Internal ──────────────────────────────────────────────────────────────

    def _index(self, event_id: str) -> int:
        for i, ev in enumerate(self._events):
            if ev.id == event_id:
                return i
        raise EventNotFound(event_id)

    def _next_id(self) -> str:
        taken = {ev.id for ev in self._events}
        candidate = new_event_id()
        while candidate in taken:
            candidate = str(int(candidate) + 1)
        return candidate

    @staticmethod
    def _validated(data: dict) -> Event:
        try:
            return Event.model_validate(data)
        except ValidationError as exc:
            # Surface our own rule errors (e.g. InvalidRecurrenceRule) unwrapped
            for err in exc.errors():
                cause = (err.get("ctx") or {}).get("error")
                if isinstance(cause, InvalidEvent):
                    raise type(cause)(str(cause)) from exc
            raise InvalidEvent(str(exc)) from exc

    def _load(self):
        if self._storage is None:
            return
        rows = self._storage.load()
        with self._lock:
            for row in rows:
                try:
                    self._events.append(Event.model_validate(row))
                except ValidationError:
                    _LOGGER.warning(
                        "Skipping invalid stored event %s",
                        row.get("id") if isinstance(row, dict) else row,
                        exc_info=True,
                    )
        _LOGGER.info("Loaded %d events from %s", len(self._events), self._storage.path)

    def _persist(self):
        # Caller holds self._lock, so saves land in mutation order
        if self._storage is None:
            return
        self._storage.save([ev.to_record() for ev in self._events])
