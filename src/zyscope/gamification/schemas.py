"""Request/response schemas for XP grant endpoints."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from zyscope.db.base import MAX_INTEGER


class XPGrantRequest(BaseModel):
    """XP earned outside the explore flow.

    ``xp`` must be a non-negative whole number; fractional, infinite and
    NaN values are rejected by the int coercion.
    """

    user_id: int = Field(..., gt=0, le=MAX_INTEGER, validation_alias=AliasChoices("userId", "user_id"))
    xp: int = Field(..., ge=0, le=MAX_INTEGER)


class MinigameXPResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    xp_awarded: int = Field(alias="xpAwarded")
    total_points: int = Field(alias="totalPoints")


class XPAddResponse(MinigameXPResponse):
    level: int
