"""Tests for half-open overlap detection."""

from __future__ import annotations

from datetime import datetime

import pytest

from conftest import make_event
from conflicts import find_conflicts, overlaps
from models import ConflictCheck


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 1, 1, hour, minute)


class TestOverlaps:

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ((_at(10), _at(11)), (_at(10, 30), _at(10, 45)), True),    # contains
            ((_at(10, 30), _at(10, 45)), (_at(10), _at(11)), True),    # contained
            ((_at(10), _at(11)), (_at(9), _at(10, 30)), True),         # start inside
            ((_at(10), _at(11)), (_at(10, 30), _at(12)), True),        # end inside
            ((_at(10), _at(11)), (_at(10), _at(11)), True),            # identical
            ((_at(10), _at(11)), (_at(11), _at(12)), False),           # touches end
            ((_at(10), _at(11)), (_at(9), _at(10)), False),            # touches start
            ((_at(10), _at(11)), (_at(13), _at(14)), False),           # disjoint
        ],
    )
    def test_half_open_intervals(self, a, b, expected):
        assert overlaps(*a, *b) is expected
        assert overlaps(*b, *a) is expected


class TestZeroDuration:

    def test_point_inside_interval(self):
        assert overlaps(_at(10, 30), _at(10, 30), _at(10), _at(11))
        assert overlaps(_at(10), _at(11), _at(10, 30), _at(10, 30))

    def test_point_at_interval_start(self):
        assert overlaps(_at(10), _at(10), _at(10), _at(11))

    def test_point_at_interval_end(self):
        assert not overlaps(_at(11), _at(11), _at(10), _at(11))

    def test_same_instant_points(self):
        assert overlaps(_at(10), _at(10), _at(10), _at(10))

    def test_different_instant_points(self):
        assert not overlaps(_at(10), _at(10), _at(10, 1), _at(10, 1))


class TestFindConflicts:

    def test_reports_overlapping_events_in_order(self):
        candidate = make_event(event_id="new", start=_at(10), end=_at(11))
        existing = [
            make_event(event_id="a", start=_at(10, 30), end=_at(10, 45)),
            make_event(event_id="b", start=_at(11), end=_at(12)),
            make_event(event_id="c", start=_at(9), end=_at(10, 15)),
        ]
        assert [ev.id for ev in find_conflicts(candidate, existing)] == ["a", "c"]

    def test_ignores_event_with_same_id(self):
        candidate = make_event(event_id="a", start=_at(10), end=_at(11))
        existing = [make_event(event_id="a", start=_at(10), end=_at(11))]
        assert find_conflicts(candidate, existing) == []

    def test_candidate_without_id_skips_nothing(self):
        candidate = ConflictCheck(start_time=_at(10), end_time=_at(11))
        existing = [make_event(event_id=eid, start=_at(10), end=_at(11)) for eid in ("a", "b")]
        assert [ev.id for ev in find_conflicts(candidate, existing)] == ["a", "b"]

    def test_empty_collection(self):
        assert find_conflicts(make_event(), []) == []
