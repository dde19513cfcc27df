"""
main.py
───────
Event Calendar — FastAPI backend entry point.

Exposes:
  REST  /api/events                 CRUD + date / month / text filters
  REST  /api/events/{id}/move       drag-and-drop reschedule
  REST  /api/events/conflicts       double-booking check
  REST  /api/recurrence/preview     expand a rule without storing it
  REST  /api/meta                   colour palette and categories
  REST  /api/health                 process info
"""

import os
import logging
import platform
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from event_store import EventStore
from exceptions import EventNotFound, InvalidEvent
from models import (
    CATEGORIES, DEFAULT_CATEGORY, EVENT_COLORS,
    ConflictCheck, Event, EventCreate, EventDeleted, EventMove, EventUpdate,
)
from recurrence import expand
from settings import get_settings
from storage import JsonEventStorage

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
_LOGGER = logging.getLogger(__name__)


def build_store() -> EventStore:
    """Event store backed by DATA_FILE, or purely in memory when it is empty."""
    if not settings.DATA_FILE:
        return EventStore()
    return EventStore(JsonEventStorage(settings.DATA_FILE))


store = build_store()


def get_store() -> EventStore:
    return store


# ── App lifespan ──────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    _LOGGER.info("[CALENDAR] PID=%s | Platform=%s", os.getpid(), platform.system())

    yield   # Application runs here

    _LOGGER.info("[CALENDAR] Shutdown complete.")


app = FastAPI(title=settings.APP_NAME, version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error mapping ─────────────────────────────────────────────────────────────

@app.exception_handler(EventNotFound)
async def _not_found(request: Request, exc: EventNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidEvent)
async def _invalid(request: Request, exc: InvalidEvent):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ── Event endpoints ───────────────────────────────────────────────────────────

@app.get("/api/events", response_model=List[Event])
def list_events(
    day: Optional[date] = Query(None, alias="date"),
    q: Optional[str] = None,
    year: Optional[int] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    events: EventStore = Depends(get_store),
):
    if (year is None) != (month is None):
        raise HTTPException(status_code=422, detail="year and month must be given together")

    if day is not None:
        result = events.query_by_date(day)
    elif year is not None and month is not None:
        result = events.query_month(year, month)
    else:
        result = events.all()

    if q:
        matches = {ev.id for ev in events.search(q)}
        result = [ev for ev in result if ev.id in matches]
    return result


@app.get("/api/events/{event_id}", response_model=Event)
def get_event(event_id: str, events: EventStore = Depends(get_store)):
    return events.get(event_id)


@app.post("/api/events", response_model=List[Event], status_code=201)
def create_event(body: EventCreate, events: EventStore = Depends(get_store)):
    return events.add(body)


@app.patch("/api/events/{event_id}", response_model=Event)
def update_event(event_id: str, body: EventUpdate, events: EventStore = Depends(get_store)):
    return events.update(event_id, body)


@app.post("/api/events/{event_id}/move", response_model=Event)
def move_event(event_id: str, body: EventMove, events: EventStore = Depends(get_store)):
    return events.move(event_id, body.new_date)


@app.delete("/api/events/{event_id}", response_model=EventDeleted)
def delete_event(event_id: str, events: EventStore = Depends(get_store)):
    removed = events.delete(event_id)
    return EventDeleted(deleted=[ev.id for ev in removed])


@app.post("/api/events/conflicts", response_model=List[Event])
def check_conflicts(body: ConflictCheck, events: EventStore = Depends(get_store)):
    return events.query_conflicts(body)


@app.post("/api/recurrence/preview", response_model=List[Event])
def preview_recurrence(body: EventCreate):
    return expand(Event(**body.model_dump()))


# ── Meta / health ─────────────────────────────────────────────────────────────

@app.get("/api/meta")
def meta():
    return {
        "colors": EVENT_COLORS,
        "categories": CATEGORIES,
        "defaultCategory": DEFAULT_CATEGORY,
    }


@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "pid": os.getpid(),
        "platform": platform.system(),
        "python": platform.python_version(),
    }


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=True)
