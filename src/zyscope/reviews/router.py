"""Review endpoints: submit, per-location list, recent feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from zyscope.catalog.schemas import CityResponse
from zyscope.catalog.service import Catalog, format_city, get_catalog
from zyscope.config import get_settings
from zyscope.database import get_session
from zyscope.errors import LocationNotFoundError, UserNotFoundError
from zyscope.pagination import parse_limit
from zyscope.reviews.schemas import (
    LocationReviewsResponse,
    RecentReviewEntry,
    RecentReviewsResponse,
    ReviewCreatedResponse,
    ReviewRequest,
    ReviewResponse,
)
from zyscope.reviews.service import (
    get_recent_reviews_with_reviewers,
    get_reviews_for_location,
    record_review,
)
from zyscope.users.schemas import UserSummary
from zyscope.users.service import get_user

router = APIRouter(tags=["Reviews"])


@router.post("/reviews", response_model=ReviewCreatedResponse)
async def create_review(
    body: ReviewRequest,
    db: AsyncSession = Depends(get_session),
    catalog: Catalog = Depends(get_catalog),
) -> ReviewCreatedResponse:
    """Store a review under the catalog's canonical location name."""
    user = await get_user(db, body.user_id)
    if user is None:
        raise UserNotFoundError
    city = catalog.find(body.location)
    if city is None:
        raise LocationNotFoundError

    review = await record_review(db, user.id, city["name"], body.rating, body.comment)
    await db.commit()

    return ReviewCreatedResponse(
        user=UserSummary(id=user.id, username=user.username),
        city=CityResponse(**format_city(city)),
        review=ReviewResponse.model_validate(review),
    )


@router.get("/reviews", response_model=LocationReviewsResponse)
async def list_location_reviews(
    location: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_session),
    catalog: Catalog = Depends(get_catalog),
) -> LocationReviewsResponse:
    """All reviews for one catalog location, newest first."""
    city = catalog.find(location)
    if city is None:
        raise LocationNotFoundError

    reviews = await get_reviews_for_location(db, city["name"])
    return LocationReviewsResponse(
        city=CityResponse(**format_city(city)),
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
    )


@router.get("/reviews/recent", response_model=RecentReviewsResponse)
async def list_recent_reviews(
    limit: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
    catalog: Catalog = Depends(get_catalog),
) -> RecentReviewsResponse:
    """Newest reviews site-wide, each with its reviewer and catalog entry."""
    default = get_settings().recent_reviews_default_limit
    rows = await get_recent_reviews_with_reviewers(db, parse_limit(limit, default))

    entries = []
    for review, reviewer in rows:
        city = catalog.find(review.location)
        entries.append(RecentReviewEntry(
            **ReviewResponse.model_validate(review).model_dump(),
            user=UserSummary(id=reviewer.id, username=reviewer.username) if reviewer else None,
            city=CityResponse(**format_city(city)) if city else None,
        ))

    return RecentReviewsResponse(reviews=entries)
