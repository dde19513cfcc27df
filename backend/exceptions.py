"""
exceptions.py
─────────────
Error hierarchy shared by the recurrence engine, the event store and the API.
"""

from typing import Optional


class CalendarError(Exception):
    """Base exception for all calendar errors."""


class InvalidEvent(CalendarError, ValueError):
    """Event payload failed validation (e.g. end before start)."""


class InvalidRecurrenceRule(InvalidEvent):
    """Recurrence rule cannot be expanded (non-positive interval, bad weekday)."""


class EventNotFound(CalendarError, KeyError):
    """No event with the given id exists in the store.

    Attributes:
        event_id: The id that was looked up.
    """

    def __init__(self, event_id: str, message: Optional[str] = None):
        super().__init__(message or f"Event not found: {event_id}")
        self.event_id = event_id

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])
