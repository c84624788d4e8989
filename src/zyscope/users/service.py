"""User management business logic."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from zyscope.db.models import Review, User, Visit
from zyscope.errors import (
    DuplicateUsernameError,
    StoreError,
    UserNotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


def _normalize_username(username: str | None) -> str:
    cleaned = username.strip() if isinstance(username, str) else ""
    if not cleaned:
        msg = "username is required."
        raise ValidationError(msg)
    return cleaned


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Fetch a user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    """Fetch a user by exact (case-sensitive) username."""
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession) -> list[User]:
    """All users, oldest account first."""
    result = await db.execute(select(User).order_by(User.id.asc()))
    return list(result.scalars().all())


async def require_user(db: AsyncSession, user_id: int) -> User:
    """Fetch a user or raise :class:`UserNotFoundError`."""
    user = await get_user(db, user_id)
    if user is None:
        raise UserNotFoundError
    return user


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


async def create_user(db: AsyncSession, username: str) -> User:
    """
    Create a user at level 1 with 0 points.

    Raises:
        ValidationError: If the username is blank.
        DuplicateUsernameError: If the username is taken.
    """
    username = _normalize_username(username)
    if await get_user_by_username(db, username) is not None:
        raise DuplicateUsernameError

    user = User(username=username, level=1, points=0)
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        # Lost a race with a concurrent signup for the same name.
        await db.rollback()
        raise DuplicateUsernameError from e
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError from e

    logger.info("user_created", user_id=user.id, username=username)
    return user


async def get_or_create_user(db: AsyncSession, username: str) -> tuple[User, bool]:
    """
    Get the user named ``username`` or create it.

    Returns:
        Tuple of (user, created) where created is True if a new user was made.
    """
    try:
        return await create_user(db, username), True
    except DuplicateUsernameError:
        user = await get_user_by_username(db, _normalize_username(username))
        if user is None:
            # Taken a moment ago, gone now (deleted in between).
            raise StoreError from None
        return user, False


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


async def update_user_profile(
    db: AsyncSession,
    user_id: int,
    username: str,
    email: str | None = None,
    bio: str | None = None,
    profile_pic: str | None = None,
) -> User:
    """
    Replace username, email, bio and profile picture in a single UPDATE.

    Points and level are left untouched.

    Raises:
        ValidationError: If the username is blank.
        UserNotFoundError: If no user has ``user_id``.
        DuplicateUsernameError: If another user already has the username.
    """
    username = _normalize_username(username)
    await require_user(db, user_id)

    result = await db.execute(
        select(User.id)
        .where(User.username == username)
        .where(User.id != user_id)
    )
    if result.scalar_one_or_none() is not None:
        raise DuplicateUsernameError

    try:
        await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(username=username, email=email, bio=bio, profile_pic=profile_pic)
            .execution_options(synchronize_session=False)
        )
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateUsernameError from e
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError from e

    user = await db.get(User, user_id, populate_existing=True)
    if user is None:
        raise UserNotFoundError
    logger.info("profile_updated", user_id=user_id)
    return user


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """Delete a user; visits and reviews go with it via ON DELETE CASCADE.

    Deleting an unknown id is not an error.
    """
    try:
        result = await db.execute(delete(User).where(User.id == user_id))
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError from e
    logger.info("user_deleted", user_id=user_id, existed=bool(result.rowcount))


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


async def get_user_visit_count(db: AsyncSession, user_id: int) -> int:
    """Number of visits recorded for a user."""
    result = await db.execute(
        select(func.count()).select_from(Visit).where(Visit.user_id == user_id)
    )
    return result.scalar_one()


async def get_user_average_rating(db: AsyncSession, user_id: int) -> float | None:
    """Mean rating across a user's reviews, rounded to 2 places; None without reviews."""
    result = await db.execute(select(func.avg(Review.rating)).where(Review.user_id == user_id))
    avg = result.scalar_one_or_none()
    return round(float(avg), 2) if avg is not None else None


async def get_user_stats_batch(
    db: AsyncSession, user_ids: list[int],
) -> dict[int, dict]:
    """Visit counts and average ratings for many users in two grouped queries."""
    if not user_ids:
        return {}

    visit_result = await db.execute(
        select(Visit.user_id, func.count(Visit.id).label("cnt"))
        .where(Visit.user_id.in_(user_ids))
        .group_by(Visit.user_id)
    )
    visit_counts = {row.user_id: row.cnt for row in visit_result}

    rating_result = await db.execute(
        select(Review.user_id, func.avg(Review.rating).label("avg"))
        .where(Review.user_id.in_(user_ids))
        .group_by(Review.user_id)
    )
    averages = {row.user_id: round(float(row.avg), 2) for row in rating_result}

    return {
        uid: {
            "visits": visit_counts.get(uid, 0),
            "avg_rating": averages.get(uid),
        }
        for uid in user_ids
    }
