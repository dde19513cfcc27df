"""
recurrence.py
─────────────
Expands a recurring base event into its concrete, dated instances.

The expansion walks forward from the base event's start one step at a time
and stops at the rule's end date (inclusive) or one year after generation,
whichever applies, emitting at most MAX_INSTANCES generated events.
"""

import logging
import re
from datetime import datetime, time, timedelta
from typing import List, Optional, Sequence, Tuple

from date_utils import add_days, add_months, epoch_millis, js_weekday
from exceptions import InvalidRecurrenceRule
from models import Event, RecurrencePattern, RecurrenceType

_LOGGER = logging.getLogger(__name__)

MAX_INSTANCES = 100
DEFAULT_HORIZON = timedelta(days=365)

# "every 2 weeks", "every 3 days", "every 6 months"
_CUSTOM_FORMS = [
    (re.compile(r"every\s+(\d+)\s+weeks?"),  RecurrenceType.WEEKLY),
    (re.compile(r"every\s+(\d+)\s+days?"),   RecurrenceType.DAILY),
    (re.compile(r"every\s+(\d+)\s+months?"), RecurrenceType.MONTHLY),
]

Rule = Tuple[RecurrenceType, int]


def parse_custom_pattern(text: Optional[str]) -> Optional[Rule]:
    """Parse free text like "Every 3 Weeks" into (type, interval), or None."""
    if not text:
        return None
    normalized = text.lower().strip()
    for regex, rtype in _CUSTOM_FORMS:
        m = regex.search(normalized)
        if m:
            interval = int(m.group(1))
            return (rtype, interval) if interval > 0 else None
    return None


def resolve_rule(pattern: RecurrencePattern) -> Rule:
    """Effective (type, interval) after custom-pattern resolution."""
    rtype, interval = pattern.type, pattern.interval
    if rtype == RecurrenceType.CUSTOM:
        parsed = parse_custom_pattern(pattern.custom_pattern)
        if parsed is None:
            _LOGGER.debug("Unrecognised custom pattern %r, using daily", pattern.custom_pattern)
            parsed = (RecurrenceType.DAILY, 1)
        rtype, interval = parsed
    if interval is None or interval <= 0:
        raise InvalidRecurrenceRule(f"interval must be a positive integer, got {interval}")
    return rtype, interval


def next_weekly_occurrence(current: datetime, days_of_week: Sequence[int], interval: int) -> datetime:
    """
    Next date whose weekday is in days_of_week.

    Later weekdays of the current week come first; past the last one the
    cursor wraps to the smallest weekday of the week `interval` weeks ahead.
    """
    weekday = js_weekday(current)
    days = sorted(days_of_week)
    for day in days:
        if day > weekday:
            return add_days(current, day - weekday)
    return add_days(current, 7 - weekday + days[0] + 7 * (interval - 1))


def next_occurrence(current: datetime, rtype: RecurrenceType, interval: int,
                    days_of_week: Optional[Sequence[int]] = None) -> datetime:
    if rtype == RecurrenceType.WEEKLY:
        if days_of_week:
            return next_weekly_occurrence(current, days_of_week, interval)
        return add_days(current, 7 * interval)
    if rtype == RecurrenceType.MONTHLY:
        return add_months(current, interval)
    return add_days(current, interval)


def max_date(pattern: RecurrencePattern, now: Optional[datetime] = None) -> datetime:
    if pattern.end_date is not None:
        return datetime.combine(pattern.end_date, time.max)
    return (now or datetime.now()) + DEFAULT_HORIZON


def make_instance(base: Event, start: datetime) -> Event:
    return base.model_copy(deep=True, update={
        "id":              f"{base.id}-{epoch_millis(start)}",
        "start_time":      start,
        "end_time":        start + base.duration,
        "parent_event_id": base.id,
    })


def expand(base: Event, now: Optional[datetime] = None) -> List[Event]:
    """
    Base event followed by every generated instance, in start order.

    Non-recurring events (or ones without a rule) come back as a
    single-element list.
    """
    pattern = base.recurrence
    if not base.is_recurring or pattern is None:
        return [base]

    rtype, interval = resolve_rule(pattern)
    limit = max_date(pattern, now)

    events = [base]
    current = base.start_time
    steps = 0
    while current <= limit and steps < MAX_INSTANCES:
        nxt = next_occurrence(current, rtype, interval, pattern.days_of_week)
        if nxt <= limit:
            events.append(make_instance(base, nxt))
        current = nxt
        steps += 1

    _LOGGER.debug(
        "Expanded %s (%s/%d) into %d instances up to %s",
        base.id, rtype.value, interval, len(events) - 1, limit.isoformat(),
    )
    return events
