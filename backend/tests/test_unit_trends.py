"""Tests for the 12-week trend buckets."""

import uuid
from datetime import date, timedelta

from choreinsights.services.trends import (
    TREND_WEEKS,
    build_kid_trend,
    compute_week_buckets,
    empty_trend,
    trend_window_start,
)

# Tuesday; the current week started on Sunday 2026-01-25
TODAY = date(2026, 1, 27)
CURRENT_WEEK = date(2026, 1, 25)
KID = uuid.UUID("00000000-0000-0000-0000-000000000001")


class TestWeekBuckets:
    def test_always_twelve_sunday_aligned_weeks(self):
        weeks = compute_week_buckets([], 7, TODAY)
        assert len(weeks) == TREND_WEEKS
        assert weeks[0].week_start == date(2025, 11, 9)
        assert weeks[-1].week_start == CURRENT_WEEK
        assert all(w.week_start.weekday() == 6 for w in weeks)
        assert trend_window_start(TODAY) == weeks[0].week_start

    def test_empty_history_is_all_zero(self):
        weeks = compute_week_buckets([], 7, TODAY)
        assert all(w.pct == 0 and w.active_days == 0 for w in weeks)

    def test_current_week_expectation_is_capped_at_days_elapsed(self):
        weeks = compute_week_buckets([TODAY, TODAY - timedelta(days=1)], 7, TODAY)
        current = weeks[-1]
        assert current.expected_days == 3
        assert current.active_days == 2
        assert current.pct == 67
        assert weeks[-2].expected_days == 7

    def test_sunday_expects_one_day(self):
        sunday = CURRENT_WEEK
        weeks = compute_week_buckets([sunday], 7, sunday)
        assert weeks[-1].expected_days == 1
        assert weeks[-1].pct == 100

    def test_completions_counted_separately_from_active_days(self):
        monday = CURRENT_WEEK + timedelta(days=1)
        weeks = compute_week_buckets([monday, monday, monday], 7, TODAY)
        assert weeks[-1].active_days == 1
        assert weeks[-1].completions == 3

    def test_full_previous_week_is_100(self):
        prev_week = [CURRENT_WEEK - timedelta(days=i) for i in range(1, 8)]
        weeks = compute_week_buckets(prev_week, 7, TODAY)
        assert weeks[-2].active_days == 7
        assert weeks[-2].pct == 100

    def test_pct_is_capped_at_100(self):
        prev_week = [CURRENT_WEEK - timedelta(days=i) for i in range(1, 8)]
        weeks = compute_week_buckets(prev_week, 3, TODAY)
        assert weeks[-2].pct == 100

    def test_dates_outside_window_are_ignored(self):
        weeks = compute_week_buckets([date(2025, 11, 8), TODAY + timedelta(days=7)], 7, TODAY)
        assert sum(w.completions for w in weeks) == 0


class TestAssignmentAdaptedWeeks:
    def test_assigned_days_drive_expectation(self):
        monday = CURRENT_WEEK + timedelta(days=1)
        tuesday = CURRENT_WEEK + timedelta(days=2)
        weeks = compute_week_buckets([monday, tuesday], 7, TODAY, assigned_dates=[monday, tuesday])
        assert weeks[-1].expected_days == 2
        assert weeks[-1].pct == 100

    def test_weeks_without_assignments_use_baseline(self):
        monday = CURRENT_WEEK + timedelta(days=1)
        weeks = compute_week_buckets([], 7, TODAY, assigned_dates=[monday])
        assert weeks[-2].expected_days == 7

    def test_assigned_days_in_past_week(self):
        prev_sunday = CURRENT_WEEK - timedelta(weeks=1)
        assigned = [prev_sunday + timedelta(days=i) for i in (1, 3, 5)]
        weeks = compute_week_buckets(assigned[:2], 7, TODAY, assigned_dates=assigned)
        assert weeks[-2].expected_days == 3
        assert weeks[-2].pct == 67


class TestKidTrend:
    def test_delta_and_overall(self):
        prev_week = [CURRENT_WEEK - timedelta(days=i) for i in range(1, 8)]
        weeks = compute_week_buckets(prev_week + [TODAY], 7, TODAY)
        trend = build_kid_trend(KID, "Alex", weeks)
        # current week 1/3 = 33%, previous 100%
        assert weeks[-1].pct == 33
        assert trend.delta_from_prev == -67
        # (100 + 33) / 12 = 11.08
        assert trend.overall_pct == 11

    def test_empty_trend(self):
        trend = empty_trend(KID, "Alex")
        assert trend.weeks == []
        assert trend.overall_pct == 0
        assert trend.delta_from_prev == 0
