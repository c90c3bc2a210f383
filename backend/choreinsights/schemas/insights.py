from __future__ import annotations

import uuid
from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, computed_field

MilestoneTier = Literal["none", "building", "strengthening", "forming", "formed"]


class ChildProfile(BaseModel):
    """Minimal identity used to label results."""

    id: uuid.UUID
    name: str


class WeekTrend(BaseModel):
    """Activity vs. expectation for one Sunday-aligned week."""

    week_start: date
    active_days: int
    expected_days: int
    completions: int
    pct: int  # 0-100


class KidTrend(BaseModel):
    profile_id: uuid.UUID
    name: str
    weeks: list[WeekTrend]  # oldest first, current week last
    overall_pct: int
    delta_from_prev: int  # current week pct minus previous week pct


class StreakData(BaseModel):
    profile_id: uuid.UUID
    name: str
    current_streak: int
    longest_streak: int
    consistency_pct: int  # active / expected days over 30 days
    milestone: MilestoneTier = "none"


class RoutineData(BaseModel):
    profile_id: uuid.UUID
    name: str
    morning_count: int
    evening_count: int
    morning_pct: int


class DayActivity(BaseModel):
    date: date  # local calendar date
    day_label: str  # Sun .. Sat
    points_earned: int
    had_activity: bool


class ThisWeekActivity(BaseModel):
    profile_id: uuid.UUID
    name: str
    days: list[DayActivity]  # Sunday .. Saturday
    total_done: int
    total_points: int


class ComputationFailure(BaseModel):
    stage: Literal["trend", "streak", "routine", "this_week"]
    code: str
    message: str


class ChildInsights(BaseModel):
    """All insights for one child, plus any stage that had to be zeroed."""

    profile_id: uuid.UUID
    name: str
    trend: KidTrend
    streak: StreakData
    routine: RoutineData
    this_week: ThisWeekActivity
    errors: list[ComputationFailure] = Field(default_factory=list)

    @computed_field
    @property
    def ok(self) -> bool:
        return not self.errors


class InsightsResult(BaseModel):
    """Combined result of one orchestration call for a family."""

    trends: list[KidTrend]
    streaks: list[StreakData]
    routines: list[RoutineData]
    total_active_days: int  # distinct local dates with any activity
    this_week_activity: list[ThisWeekActivity]
    results: dict[uuid.UUID, ChildInsights] = Field(default_factory=dict)
