"""Leaderboard endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from zyscope.config import get_settings
from zyscope.database import get_session
from zyscope.leaderboard.schemas import LeaderboardEntry, LeaderboardResponse
from zyscope.leaderboard.service import get_leaderboard_with_stats
from zyscope.pagination import parse_limit

router = APIRouter(tags=["Leaderboard"])


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard(
    limit: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
) -> LeaderboardResponse:
    """Top users by points, with visit count and average rating."""
    default = get_settings().leaderboard_default_limit
    rows = await get_leaderboard_with_stats(db, parse_limit(limit, default))
    return LeaderboardResponse(
        users=[
            LeaderboardEntry(**{**row, "level": row["level"] or 1, "points": row["points"] or 0})
            for row in rows
        ]
    )
