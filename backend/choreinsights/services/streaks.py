"""Streak and consistency calculators.

Both work on *local* calendar dates (see ``local_time``) and take the
caller's "today" explicitly instead of reading the clock.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, NamedTuple

from choreinsights.services.scoring import capped_pct, round_half_up

# Two successive active dates at most this many days apart keep a streak
# alive, i.e. one missed day is forgiven.
MAX_STREAK_GAP_DAYS = 2
CONSISTENCY_WINDOW_DAYS = 30

MILESTONES: tuple[tuple[int, str], ...] = (
    (30, "formed"),
    (21, "forming"),
    (14, "strengthening"),
    (7, "building"),
)


class StreakCounts(NamedTuple):
    current: int
    longest: int


def calculate_streak(active_dates: Iterable[date], today: date) -> StreakCounts:
    """Current and longest streak over a collection of active local dates.

    The current streak only counts if the latest active date is today or
    yesterday. Gaps of a single missed day do not break either streak.
    """
    unique = sorted(set(active_dates), reverse=True)
    if not unique:
        return StreakCounts(0, 0)

    current = 0
    if unique[0] in (today, today - timedelta(days=1)):
        current = 1
        for newer, older in zip(unique, unique[1:]):
            if (newer - older).days > MAX_STREAK_GAP_DAYS:
                break
            current += 1

    longest = 1
    run = 1
    ascending = unique[::-1]
    for prev, curr in zip(ascending, ascending[1:]):
        if (curr - prev).days <= MAX_STREAK_GAP_DAYS:
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    return StreakCounts(current, longest)


def calculate_consistency(
    active_dates: Iterable[date],
    expected_per_week: int,
    today: date,
) -> int:
    """Percentage of expected days with activity over the trailing 30 days."""
    cutoff = today - timedelta(days=CONSISTENCY_WINDOW_DAYS)
    recent = {d for d in active_dates if d >= cutoff}
    if not recent:
        return 0
    expected = round_half_up(expected_per_week * CONSISTENCY_WINDOW_DAYS / 7)
    return capped_pct(len(recent), expected)


def milestone_for(current_streak: int) -> str:
    """Habit-formation tier reached by a current streak."""
    for threshold, tier in MILESTONES:
        if current_streak >= threshold:
            return tier
    return "none"
