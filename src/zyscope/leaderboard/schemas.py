"""Response schemas for the leaderboard."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rank: int
    id: int
    username: str
    level: int
    points: int
    visits: int = 0
    avg_rating: float | None = Field(None, alias="avgRating")


class LeaderboardResponse(BaseModel):
    users: list[LeaderboardEntry]
