"""XP grant endpoints.

The two routes intentionally differ: the mini-game grant leaves the level as
stored, the generic grant recomputes it from the new points total.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from zyscope.database import get_session
from zyscope.gamification.schemas import MinigameXPResponse, XPAddResponse, XPGrantRequest
from zyscope.gamification.xp_service import LevelPolicy, add_external_xp

router = APIRouter(tags=["Gamification"])


@router.post("/minigame/xp", response_model=MinigameXPResponse)
async def award_minigame_xp(
    body: XPGrantRequest,
    db: AsyncSession = Depends(get_session),
) -> MinigameXPResponse:
    """Credit mini-game XP; the level is preserved."""
    user = await add_external_xp(db, body.user_id, body.xp, LevelPolicy.PRESERVE)
    await db.commit()
    return MinigameXPResponse(success=True, xp_awarded=body.xp, total_points=user.points)


@router.post("/xp/add", response_model=XPAddResponse)
async def add_xp(
    body: XPGrantRequest,
    db: AsyncSession = Depends(get_session),
) -> XPAddResponse:
    """Credit XP and recompute the level from the new total."""
    user = await add_external_xp(db, body.user_id, body.xp, LevelPolicy.RECOMPUTE)
    await db.commit()
    return XPAddResponse(success=True, xp_awarded=body.xp, total_points=user.points, level=user.level)
