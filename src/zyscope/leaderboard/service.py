"""Leaderboard ranking.

Order is points, then level, then account age, so ties are stable across
calls on unchanged data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from zyscope.db.models import User
from zyscope.pagination import DEFAULT_LIMIT, clamp_limit
from zyscope.users.service import get_user_stats_batch

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


async def get_leaderboard(db: AsyncSession, limit: object = DEFAULT_LIMIT) -> list[User]:
    """Top users by points desc, level desc, id asc."""
    result = await db.execute(
        select(User)
        .order_by(User.points.desc(), User.level.desc(), User.id.asc())
        .limit(clamp_limit(limit))
    )
    return list(result.scalars().all())


async def get_leaderboard_with_stats(db: AsyncSession, limit: object = DEFAULT_LIMIT) -> list[dict]:
    """Leaderboard rows enriched with visit count and average rating."""
    users = await get_leaderboard(db, limit)
    stats = await get_user_stats_batch(db, [u.id for u in users])
    return [
        {
            "rank": i,
            "id": u.id,
            "username": u.username,
            "level": u.level,
            "points": u.points,
            "visits": stats[u.id]["visits"],
            "avg_rating": stats[u.id]["avg_rating"],
        }
        for i, u in enumerate(users, start=1)
    ]
