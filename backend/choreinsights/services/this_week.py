"""Sunday-to-Saturday activity skeleton for the current local week.

Dashboards, the weekly grid and the digest all read this one structure so
that every consumer agrees on which local day a completion belongs to.
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable

from choreinsights.schemas.insights import DayActivity, ThisWeekActivity
from choreinsights.services.local_time import DAY_LABELS, week_start_sunday


def current_week_dates(today: date) -> list[date]:
    sunday = week_start_sunday(today)
    return [sunday + timedelta(days=i) for i in range(7)]


def compose_this_week(
    profile_id: uuid.UUID,
    name: str,
    points_by_event: Iterable[tuple[date, int]],
    today: date,
) -> ThisWeekActivity:
    """Sum points per local date and lay them out over the current week.

    *points_by_event* yields ``(local_date, points_change)`` per completion.
    """
    points_by_date: dict[date, int] = defaultdict(int)
    for day, points in points_by_event:
        points_by_date[day] += points

    days = [
        DayActivity(
            date=day,
            day_label=DAY_LABELS[i],
            points_earned=points_by_date.get(day, 0),
            had_activity=points_by_date.get(day, 0) > 0,
        )
        for i, day in enumerate(current_week_dates(today))
    ]
    return ThisWeekActivity(
        profile_id=profile_id,
        name=name,
        days=days,
        total_done=sum(1 for d in days if d.had_activity),
        total_points=sum(d.points_earned for d in days),
    )


def empty_this_week(profile_id: uuid.UUID, name: str, today: date) -> ThisWeekActivity:
    return compose_this_week(profile_id, name, (), today)
