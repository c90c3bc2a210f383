"""Morning vs. evening routine classification."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Iterable

from choreinsights.schemas.insights import RoutineData
from choreinsights.services.local_time import as_utc, local_hour
from choreinsights.services.scoring import round_half_up

ROUTINE_WINDOW_DAYS = 30
MORNING_CUTOFF_HOUR = 12


def classify_routine(
    profile_id: uuid.UUID,
    name: str,
    timestamps: Iterable[datetime],
    tz_name: str,
    now: datetime,
) -> RoutineData:
    """Count completions of the last 30 days before/after local noon."""
    cutoff = as_utc(now) - timedelta(days=ROUTINE_WINDOW_DAYS)
    recent = [ts for ts in timestamps if as_utc(ts) >= cutoff]
    morning = sum(1 for ts in recent if local_hour(ts, tz_name) < MORNING_CUTOFF_HOUR)
    total = len(recent) or 1
    return RoutineData(
        profile_id=profile_id,
        name=name,
        morning_count=morning,
        evening_count=len(recent) - morning,
        morning_pct=round_half_up(morning / total * 100),
    )


def empty_routine(profile_id: uuid.UUID, name: str) -> RoutineData:
    return RoutineData(
        profile_id=profile_id, name=name, morning_count=0, evening_count=0, morning_pct=0,
    )
