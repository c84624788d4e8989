"""Review recording and review feeds."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from zyscope.db.models import Review, User
from zyscope.errors import StoreError, ValidationError
from zyscope.pagination import DEFAULT_LIMIT, clamp_limit
from zyscope.users.service import require_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating: object) -> int:
    """Ratings are whole numbers from 1 to 5."""
    if isinstance(rating, bool):
        rating = None
    if isinstance(rating, float) and rating.is_integer():
        rating = int(rating)
    if not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        msg = f"rating must be between {MIN_RATING} and {MAX_RATING}."
        raise ValidationError(msg)
    return rating


async def record_review(
    db: AsyncSession,
    user_id: int,
    location: str,
    rating: object,
    comment: str | None = None,
) -> Review:
    """
    Store a review. No XP is awarded for reviewing.

    Raises:
        ValidationError: If the rating is out of range or the location is blank.
        UserNotFoundError: If no user has ``user_id``.
    """
    rating = validate_rating(rating)
    location = location.strip() if isinstance(location, str) else ""
    if not location:
        msg = "location is required."
        raise ValidationError(msg)

    await require_user(db, user_id)

    review = Review(user_id=user_id, location=location, rating=rating, comment=comment or None)
    db.add(review)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        msg = "Review violates a data constraint."
        raise ValidationError(msg) from e
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError from e

    logger.info("review_recorded", user_id=user_id, review_id=review.id, location=location, rating=rating)
    return review


async def get_reviews_for_location(db: AsyncSession, location: str) -> list[Review]:
    """Reviews whose location equals ``location`` ignoring case, newest first."""
    result = await db.execute(
        select(Review)
        .where(func.lower(Review.location) == func.lower(location))
        .order_by(Review.created_at.desc(), Review.id.desc())
    )
    return list(result.scalars().all())


async def get_recent_reviews(db: AsyncSession, limit: object = DEFAULT_LIMIT) -> list[Review]:
    """Newest reviews across all locations."""
    result = await db.execute(
        select(Review)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(clamp_limit(limit))
    )
    return list(result.scalars().all())


async def get_recent_reviews_with_reviewers(
    db: AsyncSession, limit: object = DEFAULT_LIMIT,
) -> list[tuple[Review, User | None]]:
    """Recent reviews paired with their authors, loaded in one batch query."""
    reviews = await get_recent_reviews(db, limit)
    user_ids = {r.user_id for r in reviews}
    users: dict[int, User] = {}
    if user_ids:
        result = await db.execute(select(User).where(User.id.in_(user_ids)))
        users = {u.id: u for u in result.scalars()}
    return [(r, users.get(r.user_id)) for r in reviews]
