"""Insights orchestrator.

One call fetches the family's completion events for the last 90 days
(covering the 84-day trend and the 30-day streak/routine windows) and,
for manual families only, the last 84 days of chore assignments. Every
calculator then runs on those in-memory snapshots; nothing else touches
the database.

A failure inside one calculator for one child is logged, recorded on that
child's ``ChildInsights.errors`` and replaced by a zero-valued result. An
unusable timezone is not isolated: it fails the whole call.
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from functools import cached_property
from typing import Callable, Iterable, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from choreinsights.config import settings
from choreinsights.core.exceptions import (
    ConfigurationError,
    FamilyNotFoundError,
    PartialComputationError,
)
from choreinsights.models.family import Family
from choreinsights.schemas.insights import (
    ChildInsights,
    ChildProfile,
    ComputationFailure,
    InsightsResult,
    KidTrend,
    RoutineData,
    StreakData,
    ThisWeekActivity,
)
from choreinsights.services.activity_source import (
    AssignmentRecord,
    CompletionEvent,
    fetch_children,
    fetch_completion_events,
    fetch_manual_assignments,
)
from choreinsights.services.local_time import as_utc, local_date, resolve_timezone
from choreinsights.services.routines import classify_routine, empty_routine
from choreinsights.services.schedule_config import (
    ScheduleConfig,
    expected_days_per_week,
    parse_schedule_config,
    uses_assignment_baseline,
)
from choreinsights.services.streaks import (
    calculate_consistency,
    calculate_streak,
    milestone_for,
)
from choreinsights.services.this_week import compose_this_week, empty_this_week
from choreinsights.services.trends import (
    TREND_WEEKS,
    build_kid_trend,
    compute_week_buckets,
    empty_trend,
)

logger = logging.getLogger(__name__)

EVENT_LOOKBACK_DAYS = 90
ASSIGNMENT_LOOKBACK_DAYS = TREND_WEEKS * 7

T = TypeVar("T")


class _KidActivity:
    """One child's slice of the family snapshot, with lazily derived views."""

    def __init__(
        self,
        child: ChildProfile,
        events: list[CompletionEvent],
        tz_name: str,
    ):
        self.child = child
        self.events = events
        self.tz_name = tz_name

    @cached_property
    def local_days(self) -> list[date]:
        """Local date of every completion, in event order."""
        return [local_date(e.occurred_at, self.tz_name) for e in self.events]


def _run_stage(
    stage: str,
    child: ChildProfile,
    errors: list[ComputationFailure],
    compute: Callable[[], T],
    fallback: Callable[[], T],
) -> T:
    try:
        return compute()
    except ConfigurationError:
        raise
    except Exception as exc:
        failure = PartialComputationError(stage, child.id, exc)
        logger.warning(
            "Insights: %s failed for %s (%s)", stage, child.name, child.id,
            exc_info=True,
        )
        errors.append(ComputationFailure(
            stage=stage, code=failure.code, message=failure.message,
        ))
        return fallback()


def _trend_for(
    kid: _KidActivity,
    schedule: ScheduleConfig,
    assigned: set[date] | None,
    today: date,
) -> KidTrend:
    baseline = expected_days_per_week(schedule, kid.child.id)
    weeks = compute_week_buckets(kid.local_days, baseline, today, assigned)
    return build_kid_trend(kid.child.id, kid.child.name, weeks)


def _streak_for(kid: _KidActivity, schedule: ScheduleConfig, today: date) -> StreakData:
    active = set(kid.local_days)
    counts = calculate_streak(active, today)
    expected = expected_days_per_week(schedule, kid.child.id)
    return StreakData(
        profile_id=kid.child.id,
        name=kid.child.name,
        current_streak=counts.current,
        longest_streak=counts.longest,
        consistency_pct=calculate_consistency(active, expected, today),
        milestone=milestone_for(counts.current),
    )


def _empty_streak(child: ChildProfile) -> StreakData:
    return StreakData(
        profile_id=child.id,
        name=child.name,
        current_streak=0,
        longest_streak=0,
        consistency_pct=0,
    )


def _child_insights(
    kid: _KidActivity,
    schedule: ScheduleConfig,
    assigned: set[date] | None,
    today: date,
    now: datetime,
) -> ChildInsights:
    child = kid.child
    errors: list[ComputationFailure] = []

    trend = _run_stage(
        "trend", child, errors,
        lambda: _trend_for(kid, schedule, assigned, today),
        lambda: empty_trend(child.id, child.name),
    )
    streak = _run_stage(
        "streak", child, errors,
        lambda: _streak_for(kid, schedule, today),
        lambda: _empty_streak(child),
    )
    routine = _run_stage(
        "routine", child, errors,
        lambda: classify_routine(
            child.id, child.name, (e.occurred_at for e in kid.events), kid.tz_name, now,
        ),
        lambda: empty_routine(child.id, child.name),
    )
    this_week = _run_stage(
        "this_week", child, errors,
        lambda: compose_this_week(
            child.id,
            child.name,
            zip(kid.local_days, (e.points_change for e in kid.events)),
            today,
        ),
        lambda: empty_this_week(child.id, child.name, today),
    )

    return ChildInsights(
        profile_id=child.id,
        name=child.name,
        trend=trend,
        streak=streak,
        routine=routine,
        this_week=this_week,
        errors=errors,
    )


def _occurred_by(event: CompletionEvent, reference: datetime) -> bool:
    """False only for events known to lie after the reference instant."""
    try:
        return as_utc(event.occurred_at) <= reference
    except (AttributeError, TypeError, ValueError):
        # Kept so the owning child's calculators record the failure
        return True


def _count_active_days(events: Iterable[CompletionEvent], tz_name: str) -> int:
    days: set[date] = set()
    for event in events:
        try:
            days.add(local_date(event.occurred_at, tz_name))
        except (AttributeError, TypeError, ValueError):
            logger.warning("Insights: skipping event with bad timestamp %r", event)
    return len(days)


def compute_insights(
    events: Iterable[CompletionEvent],
    assignments: Iterable[AssignmentRecord],
    schedule: ScheduleConfig,
    children: Iterable[ChildProfile],
    tz_name: str,
    now: datetime,
) -> InsightsResult:
    """Fan a family snapshot out to every calculator.

    Pure function of its arguments; *now* is the reference instant used
    for "today", the trailing windows and the current week. Events after
    *now* are ignored.
    """
    resolve_timezone(tz_name)
    today = local_date(now, tz_name)

    reference = as_utc(now)
    activity = [
        e for e in events if e.points_change > 0 and _occurred_by(e, reference)
    ]
    events_by_child: dict[uuid.UUID, list[CompletionEvent]] = defaultdict(list)
    for event in activity:
        events_by_child[event.profile_id].append(event)

    assigned_by_child: dict[uuid.UUID, set[date]] | None = None
    assignments = list(assignments)
    if uses_assignment_baseline(schedule) and assignments:
        assigned_by_child = defaultdict(set)
        for record in assignments:
            assigned_by_child[record.profile_id].add(record.assigned_date)

    results: dict[uuid.UUID, ChildInsights] = {}
    for child in children:
        kid = _KidActivity(child, events_by_child.get(child.id, []), tz_name)
        assigned = (
            assigned_by_child.get(child.id, set())
            if assigned_by_child is not None
            else None
        )
        results[child.id] = _child_insights(kid, schedule, assigned, today, now)

    per_child = list(results.values())
    return InsightsResult(
        trends=[r.trend for r in per_child],
        streaks=[r.streak for r in per_child],
        routines=[r.routine for r in per_child],
        total_active_days=_count_active_days(activity, tz_name),
        this_week_activity=[r.this_week for r in per_child],
        results=results,
    )


async def get_insights(
    db: AsyncSession,
    family_id: uuid.UUID,
    schedule: ScheduleConfig,
    children: list[ChildProfile],
    tz_name: str = "UTC",
    *,
    now: datetime | None = None,
) -> InsightsResult:
    """Fetch a family's activity snapshot once and compute all insights."""
    resolve_timezone(tz_name)
    now = now or datetime.now(timezone.utc)

    events = await fetch_completion_events(
        db, family_id, now - timedelta(days=EVENT_LOOKBACK_DAYS), until=now,
    )
    assignments: list[AssignmentRecord] = []
    if uses_assignment_baseline(schedule):
        since = local_date(now, tz_name) - timedelta(days=ASSIGNMENT_LOOKBACK_DAYS)
        assignments = await fetch_manual_assignments(db, family_id, since)

    logger.debug(
        "Insights for family %s: %d events, %d assignments, %d children",
        family_id, len(events), len(assignments), len(children),
    )
    return compute_insights(events, assignments, schedule, children, tz_name, now)


async def load_family_context(
    db: AsyncSession,
    family_id: uuid.UUID,
) -> tuple[Family, ScheduleConfig, list[ChildProfile], str]:
    """Load the family row, its schedule, children and effective timezone."""
    result = await db.execute(select(Family).where(Family.id == family_id))
    family = result.scalar_one_or_none()
    if family is None:
        raise FamilyNotFoundError(family_id)

    tz_name = family.timezone or settings.DEFAULT_TIMEZONE
    resolve_timezone(tz_name)
    schedule = parse_schedule_config(family.settings)
    children = await fetch_children(db, family_id)
    return family, schedule, children, tz_name


async def load_family_insights(
    db: AsyncSession,
    family_id: uuid.UUID,
    *,
    now: datetime | None = None,
) -> InsightsResult:
    """Insights for a stored family, using its own settings and children."""
    _family, schedule, children, tz_name = await load_family_context(db, family_id)
    return await get_insights(db, family_id, schedule, children, tz_name, now=now)
