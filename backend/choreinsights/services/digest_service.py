"""Weekly digest content.

Turns an ``InsightsResult`` into the figures and one-line highlights the
weekly parent email/SMS is rendered from. Rendering and delivery live
elsewhere.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from choreinsights.schemas.digest import DigestSummary, LeaderboardEntry
from choreinsights.schemas.insights import InsightsResult
from choreinsights.services.insights_service import get_insights, load_family_context
from choreinsights.services.scoring import round_half_up

logger = logging.getLogger(__name__)

MAX_HIGHLIGHTS = 2
MOMENTUM_DELTA = 20
NOTABLE_STREAK = 3
HABIT_CONSISTENCY = 80


def build_leaderboard(insights: InsightsResult) -> list[LeaderboardEntry]:
    streaks = {s.profile_id: s for s in insights.streaks}
    trends = {t.profile_id: t for t in insights.trends}

    entries = []
    for activity in insights.this_week_activity:
        streak = streaks.get(activity.profile_id)
        trend = trends.get(activity.profile_id)
        entries.append(LeaderboardEntry(
            profile_id=activity.profile_id,
            name=activity.name,
            weekly_points=activity.total_points,
            active_days=activity.total_done,
            streak=streak.current_streak if streak else 0,
            consistency=streak.consistency_pct if streak else 0,
            trend_delta=trend.delta_from_prev if trend else 0,
        ))
    entries.sort(key=lambda e: e.weekly_points, reverse=True)
    return entries


def _week_pcts(insights: InsightsResult) -> tuple[int, int]:
    """Family mean of the current and previous weekly percentages."""
    trends = [t for t in insights.trends if len(t.weeks) >= 2]
    if not trends:
        return 0, 0
    current = round_half_up(sum(t.weeks[-1].pct for t in trends) / len(trends))
    previous = round_half_up(sum(t.weeks[-2].pct for t in trends) / len(trends))
    return current, previous


def _is_perfect_week(insights: InsightsResult) -> bool:
    current_weeks = [t.weeks[-1] for t in insights.trends if t.weeks]
    if not current_weeks:
        return False
    return all(w.expected_days > 0 and w.pct == 100 for w in current_weeks)


def generate_highlights(
    leaderboard: list[LeaderboardEntry],
    current_pct: int,
    previous_pct: int,
    perfect_week: bool,
) -> list[str]:
    """Pick at most two highlight lines, never naming a child twice."""
    highlights: list[str] = []
    named: set[uuid.UUID] = set()

    if perfect_week:
        highlights.append("PERFECT WEEK! Every expected day had chores done!")

    delta = current_pct - previous_pct
    if previous_pct > 0 and delta > MOMENTUM_DELTA:
        highlights.append(f"Up {delta}% from last week, great momentum!")

    streakers = sorted(
        (e for e in leaderboard if e.streak > 0), key=lambda e: e.streak, reverse=True,
    )
    if streakers and streakers[0].streak >= NOTABLE_STREAK:
        top = streakers[0]
        highlights.append(f"{top.name} has the longest streak at {top.streak} days!")
        named.add(top.profile_id)

    for entry in leaderboard:
        if entry.streak == NOTABLE_STREAK and entry.profile_id not in named:
            highlights.append(f"{entry.name} started a new {NOTABLE_STREAK}-day streak!")
            named.add(entry.profile_id)
            break

    consistent = sorted(
        (e for e in leaderboard if e.consistency >= HABIT_CONSISTENCY),
        key=lambda e: e.consistency,
        reverse=True,
    )
    if consistent and consistent[0].profile_id not in named:
        top = consistent[0]
        highlights.append(f"{top.name} has {top.consistency}% consistency, habit forming!")

    return highlights[:MAX_HIGHLIGHTS]


def build_digest_summary(
    family_id: uuid.UUID,
    family_name: str,
    insights: InsightsResult,
) -> DigestSummary:
    leaderboard = build_leaderboard(insights)
    current_pct, previous_pct = _week_pcts(insights)

    deltas = [t.delta_from_prev for t in insights.trends if t.weeks]
    mean_delta = sum(deltas) / len(deltas) if deltas else 0
    if mean_delta > 0:
        direction = "up"
    elif mean_delta < 0:
        direction = "down"
    else:
        direction = "flat"

    top_earner = leaderboard[0] if leaderboard and leaderboard[0].weekly_points > 0 else None

    return DigestSummary(
        family_id=family_id,
        family_name=family_name,
        active_days_this_week=sum(e.active_days for e in leaderboard),
        points_this_week=sum(e.weekly_points for e in leaderboard),
        current_week_pct=current_pct,
        previous_week_pct=previous_pct,
        trend_direction=direction,
        top_earner=top_earner,
        leaderboard=leaderboard,
        highlights=generate_highlights(
            leaderboard, current_pct, previous_pct, _is_perfect_week(insights),
        ),
    )


async def load_digest_summary(
    db: AsyncSession,
    family_id: uuid.UUID,
    *,
    now: datetime | None = None,
) -> DigestSummary:
    """Digest figures for a stored family."""
    family, schedule, children, tz_name = await load_family_context(db, family_id)
    insights = await get_insights(db, family_id, schedule, children, tz_name, now=now)
    failed = [r.name for r in insights.results.values() if not r.ok]
    if failed:
        logger.warning("Digest for family %s uses zeroed figures for: %s", family_id, failed)
    return build_digest_summary(family_id, family.name, insights)
