"""XP grants with guarded writes and level-up detection."""

from __future__ import annotations

import enum
import math
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from zyscope.db.base import MAX_INTEGER
from zyscope.db.models import User
from zyscope.errors import StoreError, UserNotFoundError, ValidationError
from zyscope.gamification.progression import apply_xp
from zyscope.users.service import require_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

# Attempts at the compare-and-set before giving up on a hot row.
MAX_WRITE_ATTEMPTS = 5


class LevelPolicy(enum.Enum):
    """How a grant treats the stored level.

    The mini-game grant keeps the level as is; the generic XP grant and
    visits derive it from the new points total.
    """

    RECOMPUTE = "recompute"
    PRESERVE = "preserve"


def validate_xp_amount(xp: object) -> int:
    """Return ``xp`` as an int if it is a non-negative, finite, whole number the store can hold."""
    if isinstance(xp, bool) or not isinstance(xp, (int, float)):
        msg = "xp must be a number."
        raise ValidationError(msg)
    if isinstance(xp, float) and (not math.isfinite(xp) or not xp.is_integer()):
        msg = "xp must be a finite whole number."
        raise ValidationError(msg)
    if xp < 0:
        msg = "xp must not be negative."
        raise ValidationError(msg)
    if xp > MAX_INTEGER:
        msg = "xp is too large."
        raise ValidationError(msg)
    return int(xp)


async def grant_points(
    db: AsyncSession,
    user: User,
    amount: int,
    level_policy: LevelPolicy = LevelPolicy.RECOMPUTE,
) -> User:
    """Add ``amount`` points to ``user`` and persist points/level.

    The write is conditional on the points value it was computed from, so a
    concurrent grant is re-read and re-applied instead of being overwritten.
    Does not commit.
    """
    old_level = user.level or 1
    for _ in range(MAX_WRITE_ATTEMPTS):
        expected = user.points
        progress = apply_xp(expected or 0, amount)
        if progress.points > MAX_INTEGER:
            msg = "Points total would exceed the maximum."
            raise ValidationError(msg)
        level = progress.level if level_policy is LevelPolicy.RECOMPUTE else (user.level or 1)

        try:
            result = await db.execute(
                update(User)
                .where(User.id == user.id)
                .where(User.points == expected)
                .values(points=progress.points, level=level)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            await db.rollback()
            raise StoreError from e

        if result.rowcount == 1:
            await db.refresh(user)
            if user.level > old_level:
                logger.info(
                    "level_up",
                    user_id=user.id,
                    old_level=old_level,
                    new_level=user.level,
                )
            return user

        refreshed = await db.get(User, user.id, populate_existing=True)
        if refreshed is None:
            raise UserNotFoundError
        user = refreshed

    logger.warning("xp_write_contended", user_id=user.id, amount=amount)
    msg = "Could not save XP, please retry."
    raise StoreError(msg)


async def add_external_xp(
    db: AsyncSession,
    user_id: int,
    xp: object,
    level_policy: LevelPolicy,
) -> User:
    """
    Credit XP earned outside the explore flow (mini-game, client-side bonuses).

    Raises:
        ValidationError: If ``xp`` is negative, non-finite or fractional, or the
            new total would not fit the points column.
        UserNotFoundError: If no user has ``user_id``.
    """
    amount = validate_xp_amount(xp)
    user = await require_user(db, user_id)
    user = await grant_points(db, user, amount, level_policy)
    logger.info(
        "xp_granted",
        user_id=user_id,
        amount=amount,
        policy=level_policy.value,
        total=user.points,
    )
    return user
