"""12-week consistency trend.

Weeks are Sunday-aligned in the family's local calendar. The current week
is still in progress, so its expected days are capped at the number of
days elapsed so far (Sunday = 1 .. Saturday = 7).
"""

from __future__ import annotations

import uuid
from collections import Counter
from datetime import date, timedelta
from typing import Iterable

from choreinsights.schemas.insights import KidTrend, WeekTrend
from choreinsights.services.local_time import days_since_sunday, week_start_sunday
from choreinsights.services.schedule_config import expected_days_for_week
from choreinsights.services.scoring import capped_pct, round_half_up

TREND_WEEKS = 12


def trend_window_start(today: date) -> date:
    """First day of the oldest week covered by the trend."""
    return week_start_sunday(today) - timedelta(weeks=TREND_WEEKS - 1)


def compute_week_buckets(
    completion_dates: Iterable[date],
    baseline: int,
    today: date,
    assigned_dates: Iterable[date] | None = None,
) -> list[WeekTrend]:
    """Bucket one child's completions into ``TREND_WEEKS`` weekly summaries.

    *completion_dates* holds one local date per completion event (not
    deduplicated: the number of entries is the completion count). When
    *assigned_dates* is given, each week's expectation comes from the
    child's manual assignments in that week, falling back to *baseline*.
    """
    per_day = Counter(completion_dates)
    assigned = set(assigned_dates) if assigned_dates is not None else None
    first_week = trend_window_start(today)
    days_so_far = days_since_sunday(today) + 1

    weeks: list[WeekTrend] = []
    for w in range(TREND_WEEKS):
        week_start = first_week + timedelta(weeks=w)
        week_days = [week_start + timedelta(days=i) for i in range(7)]

        active_days = sum(1 for d in week_days if per_day.get(d))
        completions = sum(per_day.get(d, 0) for d in week_days)

        if assigned is not None:
            expected = expected_days_for_week(baseline, assigned, week_start)
        else:
            expected = baseline
        if w == TREND_WEEKS - 1:
            expected = min(expected, days_so_far)

        weeks.append(WeekTrend(
            week_start=week_start,
            active_days=active_days,
            expected_days=expected,
            completions=completions,
            pct=capped_pct(active_days, expected),
        ))
    return weeks


def build_kid_trend(profile_id: uuid.UUID, name: str, weeks: list[WeekTrend]) -> KidTrend:
    current_pct = weeks[-1].pct if weeks else 0
    prev_pct = weeks[-2].pct if len(weeks) > 1 else 0
    overall = round_half_up(sum(w.pct for w in weeks) / len(weeks)) if weeks else 0
    return KidTrend(
        profile_id=profile_id,
        name=name,
        weeks=weeks,
        overall_pct=overall,
        delta_from_prev=current_pct - prev_pct,
    )


def empty_trend(profile_id: uuid.UUID, name: str) -> KidTrend:
    return KidTrend(
        profile_id=profile_id, name=name, weeks=[], overall_pct=0, delta_from_prev=0,
    )
