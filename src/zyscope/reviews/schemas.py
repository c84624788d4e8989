"""Request/response schemas for review endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from zyscope.catalog.schemas import CityResponse
from zyscope.db.base import MAX_INTEGER
from zyscope.users.schemas import UserSummary


class ReviewRequest(BaseModel):
    """Rate a catalog location 1-5 with an optional comment."""

    user_id: int = Field(..., gt=0, le=MAX_INTEGER)
    location: str = Field(..., max_length=200)
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(None, max_length=2000)

    @field_validator("location")
    @classmethod
    def require_location(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "location must not be blank"
            raise ValueError(msg)
        return v


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    location: str
    rating: int
    comment: str | None = None
    created_at: datetime


class ReviewCreatedResponse(BaseModel):
    user: UserSummary
    city: CityResponse
    review: ReviewResponse


class LocationReviewsResponse(BaseModel):
    city: CityResponse
    reviews: list[ReviewResponse]


class RecentReviewEntry(ReviewResponse):
    user: UserSummary | None = None
    city: CityResponse | None = None


class RecentReviewsResponse(BaseModel):
    reviews: list[RecentReviewEntry]
