"""Read-only queries against the chore ledger and assignment tables.

Rows are materialised into small immutable records so the calculators
never touch ORM objects or the session.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from choreinsights.models.chore import ChoreAssignment, ChoreTransaction
from choreinsights.models.family import FamilyProfile
from choreinsights.schemas.insights import ChildProfile
from choreinsights.services.local_time import as_utc


@dataclass(frozen=True)
class CompletionEvent:
    profile_id: uuid.UUID
    occurred_at: datetime  # UTC
    points_change: int


@dataclass(frozen=True)
class AssignmentRecord:
    profile_id: uuid.UUID
    assigned_date: date  # local date


@dataclass(frozen=True)
class DescribedCompletion:
    profile_id: uuid.UUID
    occurred_at: datetime  # UTC
    points_change: int
    description: str | None


async def fetch_completion_events(
    db: AsyncSession,
    family_id: uuid.UUID,
    since: datetime,
    until: datetime | None = None,
) -> list[CompletionEvent]:
    """Positive-point ledger rows of a family created in ``[since, until]``.

    Without *until* the range is open-ended.
    """
    conditions = [
        ChoreTransaction.family_id == family_id,
        ChoreTransaction.points_change > 0,
        ChoreTransaction.created_at >= since,
    ]
    if until is not None:
        conditions.append(ChoreTransaction.created_at <= until)

    q = (
        select(
            ChoreTransaction.profile_id,
            ChoreTransaction.created_at,
            ChoreTransaction.points_change,
        )
        .where(and_(*conditions))
        .order_by(ChoreTransaction.created_at)
    )
    result = await db.execute(q)
    return [
        CompletionEvent(
            profile_id=row.profile_id,
            occurred_at=as_utc(row.created_at),
            points_change=row.points_change,
        )
        for row in result.all()
    ]


async def fetch_manual_assignments(
    db: AsyncSession,
    family_id: uuid.UUID,
    since: date,
) -> list[AssignmentRecord]:
    """Manual chore assignments of a family dated on or after *since*."""
    q = (
        select(ChoreAssignment.assigned_to_profile_id, ChoreAssignment.assigned_date)
        .where(
            and_(
                ChoreAssignment.family_id == family_id,
                ChoreAssignment.assigned_date >= since,
            ),
        )
    )
    result = await db.execute(q)
    return [
        AssignmentRecord(profile_id=row.assigned_to_profile_id, assigned_date=row.assigned_date)
        for row in result.all()
    ]


async def fetch_described_completions(
    db: AsyncSession,
    family_id: uuid.UUID,
    start: datetime,
    end: datetime,
) -> list[DescribedCompletion]:
    """``chore_completed`` ledger rows in ``[start, end]`` with their descriptions."""
    q = (
        select(
            ChoreTransaction.profile_id,
            ChoreTransaction.created_at,
            ChoreTransaction.points_change,
            ChoreTransaction.description,
        )
        .where(
            and_(
                ChoreTransaction.family_id == family_id,
                ChoreTransaction.transaction_type == "chore_completed",
                ChoreTransaction.points_change > 0,
                ChoreTransaction.created_at >= start,
                ChoreTransaction.created_at <= end,
            ),
        )
        .order_by(ChoreTransaction.created_at)
    )
    result = await db.execute(q)
    return [
        DescribedCompletion(
            profile_id=row.profile_id,
            occurred_at=as_utc(row.created_at),
            points_change=row.points_change,
            description=row.description,
        )
        for row in result.all()
    ]


async def fetch_children(db: AsyncSession, family_id: uuid.UUID) -> list[ChildProfile]:
    """Active (non-deleted) child profiles of a family, ordered by name."""
    q = (
        select(FamilyProfile.id, FamilyProfile.name)
        .where(
            FamilyProfile.family_id == family_id,
            FamilyProfile.role == "child",
            or_(FamilyProfile.is_deleted.is_(None), FamilyProfile.is_deleted.is_(False)),
        )
        .order_by(FamilyProfile.name)
    )
    result = await db.execute(q)
    return [ChildProfile(id=row.id, name=row.name) for row in result.all()]
