import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from choreinsights.core.rate_limit import limiter
from choreinsights.database import get_db
from choreinsights.schemas.digest import DigestSummary
from choreinsights.schemas.grid import WeeklyGrid
from choreinsights.schemas.insights import InsightsResult
from choreinsights.services.digest_service import load_digest_summary
from choreinsights.services.grid_service import build_weekly_grid
from choreinsights.services.insights_service import load_family_insights

router = APIRouter(prefix="/insights", tags=["Insights"])


@router.get(
    "/families/{family_id}",
    response_model=InsightsResult,
)
@limiter.limit("30/minute")
async def family_insights(
    request: Request,
    family_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> InsightsResult:
    """Trends, streaks, routines and this week's activity for every child.

    Children whose computation failed are still listed with zeroed figures;
    see ``results[<id>].errors``.
    """
    return await load_family_insights(db, family_id)


@router.get(
    "/families/{family_id}/weekly-grid",
    response_model=WeeklyGrid,
)
@limiter.limit("30/minute")
async def family_weekly_grid(
    request: Request,
    family_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WeeklyGrid:
    """Sunday-to-Saturday grid with the chores each child completed."""
    return await build_weekly_grid(db, family_id)


@router.get(
    "/families/{family_id}/digest",
    response_model=DigestSummary,
)
@limiter.limit("10/minute")
async def family_digest(
    request: Request,
    family_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DigestSummary:
    """Figures and highlights of the weekly parent digest."""
    return await load_digest_summary(db, family_id)
