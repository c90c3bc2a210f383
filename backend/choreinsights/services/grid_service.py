"""Weekly chore grid.

Overlays the names of completed chores onto the shared this-week skeleton
produced by the insights orchestrator, so the grid and the dashboard never
disagree about which day a completion belongs to.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from choreinsights.schemas.grid import GridChore, GridDay, GridKid, WeeklyGrid
from choreinsights.schemas.insights import InsightsResult
from choreinsights.services.activity_source import DescribedCompletion, fetch_described_completions
from choreinsights.services.insights_service import get_insights, load_family_context
from choreinsights.services.local_time import local_date
from choreinsights.services.this_week import current_week_dates

logger = logging.getLogger(__name__)

_DESCRIPTION_PREFIXES = ("Chore completed: ", "Completed: ")
_POINTS_SUFFIX = re.compile(r"\s*\(\+\d+\s*pts?\)\s*$")


def chore_name_from_description(description: str | None) -> str:
    """Extract the chore name from a ledger description.

    >>> chore_name_from_description("Chore completed: Feed pet (+2 pts)")
    'Feed pet'
    """
    name = description or "Chore"
    for prefix in _DESCRIPTION_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
            break
    return _POINTS_SUFFIX.sub("", name).strip() or "Chore"


def format_week_label(week_start: date, week_end: date) -> str:
    """``"Feb 1 - Feb 7, 2026"``; the year is taken from the week's end."""
    return (
        f"{week_start.strftime('%b')} {week_start.day} - "
        f"{week_end.strftime('%b')} {week_end.day}, {week_end.year}"
    )


def compose_weekly_grid(
    insights: InsightsResult,
    completions: list[DescribedCompletion],
    tz_name: str,
    today: date,
    generated_at: datetime,
) -> WeeklyGrid:
    """Build the grid from an insights result and the week's completions."""
    week = current_week_dates(today)
    if insights.this_week_activity:
        week = [d.date for d in insights.this_week_activity[0].days] or week
    week_start, week_end = week[0], week[-1]

    chores_by_kid_day: dict[uuid.UUID, dict[date, list[tuple[str, int]]]] = defaultdict(
        lambda: defaultdict(list),
    )
    for tx in completions:
        tx_date = local_date(tx.occurred_at, tz_name)
        if tx_date < week_start or tx_date > week_end:
            continue
        chores_by_kid_day[tx.profile_id][tx_date].append(
            (chore_name_from_description(tx.description), tx.points_change),
        )

    streaks = {s.profile_id: s.current_streak for s in insights.streaks}

    kids: list[GridKid] = []
    for activity in insights.this_week_activity:
        days: list[GridDay] = []
        for day in activity.days:
            day_chores = chores_by_kid_day.get(activity.profile_id, {}).get(day.date, [])
            days.append(GridDay(
                date=day.date,
                day_label=day.day_label,
                points=day.points_earned,
                complete=day.had_activity,
                chores=[
                    GridChore(
                        id=f"chore_{activity.profile_id}_{day.date.isoformat()}_{idx}",
                        name=name,
                        points=points,
                    )
                    for idx, (name, points) in enumerate(day_chores)
                ],
            ))
        kids.append(GridKid(
            id=activity.profile_id,
            name=activity.name,
            days=days,
            weekly_total=activity.total_points,
            streak=streaks.get(activity.profile_id, 0),
        ))

    kids.sort(key=lambda k: k.weekly_total, reverse=True)

    return WeeklyGrid(
        week_label=format_week_label(week_start, week_end),
        week_start=week_start,
        week_end=week_end,
        kids=kids,
        generated_at=generated_at,
    )


async def build_weekly_grid(
    db: AsyncSession,
    family_id: uuid.UUID,
    *,
    now: datetime | None = None,
) -> WeeklyGrid:
    """Weekly grid for a stored family."""
    now = now or datetime.now(timezone.utc)
    _family, schedule, children, tz_name = await load_family_context(db, family_id)
    insights = await get_insights(db, family_id, schedule, children, tz_name, now=now)

    today = local_date(now, tz_name)
    week = current_week_dates(today)
    # One day of slack before the week covers every UTC offset
    start = datetime.combine(week[0] - timedelta(days=1), time.min, tzinfo=timezone.utc)
    end = now
    completions = await fetch_described_completions(db, family_id, start, end)

    grid = compose_weekly_grid(insights, completions, tz_name, today, now)
    logger.info(
        "Weekly grid for family %s: %d kids, week %s to %s",
        family_id, len(grid.kids), grid.week_start, grid.week_end,
    )
    return grid
