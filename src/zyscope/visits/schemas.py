"""Request/response schemas for explore/visit endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from zyscope.catalog.schemas import CityResponse
from zyscope.db.base import MAX_INTEGER
from zyscope.users.schemas import UserProgressSummary


class ExploreRequest(BaseModel):
    """Mark a catalog location as visited."""

    user_id: int = Field(..., gt=0, le=MAX_INTEGER)
    location: str = Field(..., max_length=200)

    @field_validator("location")
    @classmethod
    def require_location(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "location must not be blank"
            raise ValueError(msg)
        return v


class VisitSummary(BaseModel):
    id: int
    visited_at: datetime
    location: str


class ExploreResponse(BaseModel):
    user: UserProgressSummary
    city: CityResponse
    visit: VisitSummary


class VisitEntry(BaseModel):
    id: int
    user_id: int
    location: str
    visited_at: datetime
    city: CityResponse | None = None


class VisitsResponse(BaseModel):
    user: UserProgressSummary
    visits: list[VisitEntry]
