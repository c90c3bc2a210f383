import uuid
from typing import Literal

from pydantic import BaseModel


class LeaderboardEntry(BaseModel):
    profile_id: uuid.UUID
    name: str
    weekly_points: int
    active_days: int  # days with activity this week
    streak: int
    consistency: int  # 30-day consistency %
    trend_delta: int  # week-over-week change of the weekly %


class DigestSummary(BaseModel):
    """Behavioral figures of a family's weekly digest (content, not markup)."""

    family_id: uuid.UUID
    family_name: str
    active_days_this_week: int
    points_this_week: int
    current_week_pct: int
    previous_week_pct: int
    trend_direction: Literal["up", "down", "flat"]
    top_earner: LeaderboardEntry | None = None
    leaderboard: list[LeaderboardEntry]
    highlights: list[str]
