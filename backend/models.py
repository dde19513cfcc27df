"""
models.py
─────────
Shared Pydantic data models for the calendar API.

Attributes are snake_case in Python; records on the wire and on disk use
camelCase keys (startTime, isRecurring, parentEventId, ...).
"""

from __future__ import annotations

import time
from datetime import date, datetime, timedelta
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from exceptions import InvalidEvent, InvalidRecurrenceRule

EVENT_COLORS = [
    "#3B82F6",   # Blue
    "#EF4444",   # Red
    "#10B981",   # Green
    "#F59E0B",   # Yellow
    "#8B5CF6",   # Purple
    "#F97316",   # Orange
    "#EC4899",   # Pink
    "#6B7280",   # Gray
]

CATEGORIES = ["Work", "Personal", "Meeting", "Appointment", "Event", "Reminder", "Other"]

DEFAULT_CATEGORY = "General"


def new_event_id() -> str:
    return str(int(time.time() * 1000))


class RecurrenceType(str, Enum):
    DAILY   = "daily"
    WEEKLY  = "weekly"
    MONTHLY = "monthly"
    CUSTOM  = "custom"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecurrencePattern(_CamelModel):
    type: RecurrenceType = RecurrenceType.DAILY
    interval: int = 1
    days_of_week: Optional[List[int]] = None     # 0 = Sunday ... 6 = Saturday
    end_date: Optional[date] = None              # inclusive
    custom_pattern: Optional[str] = None         # "every 2 weeks"

    @field_validator("interval")
    @classmethod
    def _positive_interval(cls, v: int) -> int:
        if v <= 0:
            raise InvalidRecurrenceRule(f"interval must be a positive integer, got {v}")
        return v

    @field_validator("days_of_week")
    @classmethod
    def _valid_weekdays(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        if v is None:
            return None
        bad = [d for d in v if not 0 <= d <= 6]
        if bad:
            raise InvalidRecurrenceRule(f"weekday indices must be within 0..6, got {bad}")
        return sorted(set(v))

    @field_validator("end_date", mode="before")
    @classmethod
    def _date_only(cls, v):
        # Browsers send full ISO timestamps for date pickers
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v


class _EventFields(_CamelModel):
    title: str
    description: str = ""
    start_time: datetime
    end_time: datetime
    color: str = EVENT_COLORS[0]
    category: str = DEFAULT_CATEGORY
    is_recurring: bool = False
    recurrence: Optional[RecurrencePattern] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _wall_clock(cls, v: datetime) -> datetime:
        # Keep local wall-clock components, never convert between offsets
        return v.replace(tzinfo=None) if v.tzinfo is not None else v

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, v):
        return DEFAULT_CATEGORY if v is None or v == "" else v

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end_time < self.start_time:
            raise InvalidEvent(
                f"end time {self.end_time.isoformat()} is before "
                f"start time {self.start_time.isoformat()}"
            )
        return self

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time


class Event(_EventFields):
    id: str = Field(default_factory=new_event_id)
    parent_event_id: Optional[str] = None

    @property
    def is_instance(self) -> bool:
        return self.parent_event_id is not None

    def to_record(self) -> dict:
        """Persisted shape: camelCase keys, naive ISO-8601 timestamps."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EventCreate(_EventFields):

    @model_validator(mode="after")
    def _drop_rule_when_not_recurring(self):
        if not self.is_recurring:
            self.recurrence = None
        return self


class ConflictCheck(_EventFields):
    """Candidate for a double-booking check; without an id nothing is skipped."""
    id: Optional[str] = None
    title: str = ""


class EventUpdate(_CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    color: Optional[str] = None
    category: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurrence: Optional[RecurrencePattern] = None


class EventMove(_CamelModel):
    new_date: date = Field(alias="date")


class EventDeleted(_CamelModel):
    deleted: List[str]
