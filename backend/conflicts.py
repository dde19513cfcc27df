"""
conflicts.py
────────────
Double-booking detection over half-open [start, end) intervals.
"""

from datetime import datetime
from typing import Iterable, List, Union

from models import ConflictCheck, Event


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """
    Half-open overlap test.

    A zero-duration interval [p, p) counts as overlapping when p lies in
    [b_start, b_end), and two zero-duration intervals overlap only when
    they are the same instant. A point at the other's end never overlaps.
    """
    if a_start == a_end and b_start == b_end:
        return a_start == b_start
    if a_start == a_end:
        return b_start <= a_start < b_end
    if b_start == b_end:
        return a_start <= b_start < a_end
    return a_start < b_end and b_start < a_end


def find_conflicts(candidate: Union[Event, ConflictCheck], existing: Iterable[Event]) -> List[Event]:
    """
    Every event in `existing` overlapping the candidate.

    A candidate with an id never conflicts with the stored copy of itself.
    """
    return [
        ev for ev in existing
        if (candidate.id is None or ev.id != candidate.id)
        and overlaps(candidate.start_time, candidate.end_time, ev.start_time, ev.end_time)
    ]
