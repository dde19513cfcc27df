"""Shared fixtures: an in-memory event store and an API client bound to it."""

from __future__ import annotations

import os
from datetime import datetime

# Keep the app from touching backend/data during tests
os.environ.setdefault("CALENDAR_DATA_FILE", "")

import pytest  # noqa: E402

from event_store import EventStore  # noqa: E402
from models import Event, EventCreate, RecurrencePattern  # noqa: E402


def make_event(
    *,
    event_id: str = "base",
    title: str = "Standup",
    start: datetime = datetime(2024, 1, 1, 9, 0),
    end: datetime | None = None,
    recurrence: RecurrencePattern | None = None,
    **extra,
) -> Event:
    if end is None:
        end = start.replace(hour=start.hour + 1)
    return Event(
        id=event_id,
        title=title,
        description=extra.pop("description", "Daily sync"),
        start_time=start,
        end_time=end,
        is_recurring=recurrence is not None,
        recurrence=recurrence,
        **extra,
    )


def make_form(
    *,
    title: str = "Standup",
    start: datetime = datetime(2024, 1, 1, 9, 0),
    end: datetime | None = None,
    recurrence: RecurrencePattern | None = None,
    **extra,
) -> EventCreate:
    if end is None:
        end = start.replace(hour=start.hour + 1)
    return EventCreate(
        title=title,
        start_time=start,
        end_time=end,
        is_recurring=recurrence is not None,
        recurrence=recurrence,
        **extra,
    )


@pytest.fixture
def store() -> EventStore:
    return EventStore()


@pytest.fixture
def client(store):
    from fastapi.testclient import TestClient

    from main import app, get_store

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
