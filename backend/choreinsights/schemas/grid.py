import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel


class GridChore(BaseModel):
    id: str
    name: str
    points: int
    status: Literal["completed"] = "completed"  # the grid only lists completed chores


class GridDay(BaseModel):
    date: date
    day_label: str
    points: int
    complete: bool
    chores: list[GridChore]


class GridKid(BaseModel):
    id: uuid.UUID
    name: str
    days: list[GridDay]
    weekly_total: int
    streak: int


class WeeklyGrid(BaseModel):
    """Sunday-to-Saturday chore grid for one family."""

    week_label: str  # "Feb 1 - Feb 7, 2026"
    week_start: date
    week_end: date
    kids: list[GridKid]
    generated_at: datetime
