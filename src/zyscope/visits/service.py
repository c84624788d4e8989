"""Visit recording and the explore XP award."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from zyscope.db.models import User, Visit
from zyscope.errors import StoreError, ValidationError
from zyscope.gamification.progression import VISIT_XP
from zyscope.gamification.xp_service import LevelPolicy, grant_points
from zyscope.users.service import require_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


async def record_visit(
    db: AsyncSession,
    user_id: int,
    location: str,
) -> tuple[User, Visit]:
    """
    Record a visit and award ``VISIT_XP`` points, recomputing the level.

    The visit insert and the points update happen in the caller's
    transaction: nothing is visible until the caller commits, and a failure
    in either step leaves neither behind once the session rolls back.

    Raises:
        ValidationError: If ``location`` is blank.
        UserNotFoundError: If no user has ``user_id``.
    """
    location = location.strip() if isinstance(location, str) else ""
    if not location:
        msg = "location is required."
        raise ValidationError(msg)

    user = await require_user(db, user_id)

    visit = Visit(user_id=user.id, location=location)
    db.add(visit)
    try:
        await db.flush()
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError from e

    user = await grant_points(db, user, VISIT_XP, LevelPolicy.RECOMPUTE)
    logger.info(
        "visit_recorded",
        user_id=user.id,
        visit_id=visit.id,
        location=location,
        points=user.points,
        level=user.level,
    )
    return user, visit


async def get_visits(db: AsyncSession, user_id: int) -> list[Visit]:
    """Visits for a user, newest first; ties broken by insertion order."""
    result = await db.execute(
        select(Visit)
        .where(Visit.user_id == user_id)
        .order_by(Visit.visited_at.desc(), Visit.id.desc())
    )
    return list(result.scalars().all())
