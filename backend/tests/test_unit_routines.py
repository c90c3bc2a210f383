"""Tests for morning/evening routine classification."""

import uuid
from datetime import datetime, timedelta, timezone

from choreinsights.services.routines import classify_routine, empty_routine

KID = uuid.UUID("00000000-0000-0000-0000-000000000001")
NOW = datetime(2026, 1, 27, 18, 0, tzinfo=timezone.utc)


def _at(days_ago: int, hour: int) -> datetime:
    day = NOW - timedelta(days=days_ago)
    return day.replace(hour=hour, minute=0)


class TestClassifyRoutine:
    def test_empty(self):
        routine = classify_routine(KID, "Alex", [], "UTC", NOW)
        assert (routine.morning_count, routine.evening_count, routine.morning_pct) == (0, 0, 0)

    def test_split_at_local_noon(self):
        stamps = [_at(1, 7), _at(2, 11), _at(3, 12), _at(4, 19)]
        routine = classify_routine(KID, "Alex", stamps, "UTC", NOW)
        assert routine.morning_count == 2
        assert routine.evening_count == 2
        assert routine.morning_pct == 50

    def test_uses_family_timezone(self):
        # 10:00 UTC is 13:00 in Nairobi
        routine = classify_routine(KID, "Alex", [_at(1, 10)], "Africa/Nairobi", NOW)
        assert routine.morning_count == 0
        assert routine.evening_count == 1

    def test_only_last_30_days(self):
        stamps = [_at(5, 8), _at(31, 8), _at(45, 20)]
        routine = classify_routine(KID, "Alex", stamps, "UTC", NOW)
        assert routine.morning_count + routine.evening_count == 1
        assert routine.morning_pct == 100

    def test_rounding(self):
        stamps = [_at(1, 8), _at(2, 20), _at(3, 20)]
        routine = classify_routine(KID, "Alex", stamps, "UTC", NOW)
        assert routine.morning_pct == 33

    def test_accepts_iso_strings(self):
        routine = classify_routine(KID, "Alex", ["2026-01-26T06:00:00Z"], "UTC", NOW)
        assert routine.morning_count == 1

    def test_empty_routine(self):
        assert empty_routine(KID, "Alex").morning_pct == 0
