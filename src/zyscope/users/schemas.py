"""Request/response schemas for user endpoints."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from zyscope.db.base import MAX_INTEGER
from zyscope.db.models import User


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Guest login. A blank username gets a generated guest name."""

    username: str | None = Field(None, max_length=64)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


class ProfileUpdateRequest(BaseModel):
    """Replace the editable profile fields."""

    user_id: int = Field(..., gt=0, le=MAX_INTEGER)
    username: str = Field(..., max_length=64)
    email: str | None = Field(None, max_length=320)
    bio: str | None = Field(None, max_length=1000)
    profile_pic: str | None = Field(
        None,
        validation_alias=AliasChoices("profilePic", "avatar", "profile_pic"),
    )

    @field_validator("username")
    @classmethod
    def require_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "username must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("email", "bio", "profile_pic")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return v or None


class DeleteUserRequest(BaseModel):
    user_id: int = Field(..., gt=0, le=MAX_INTEGER)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """Full user row, as returned by login."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    level: int
    points: int
    email: str | None = None
    bio: str | None = None
    profile_pic: str | None = None


class UserSummary(BaseModel):
    id: int
    username: str


class UserProgressSummary(BaseModel):
    id: int
    username: str
    level: int
    points: int


class ProfileResponse(BaseModel):
    """Profile after an update; the client reads ``profilePic``."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    email: str | None = None
    bio: str | None = None
    profile_pic: str | None = Field(None, alias="profilePic")
    level: int
    points: int


class SocialLoginResponse(BaseModel):
    user: dict


class LevelProgress(BaseModel):
    level: int
    points: int
    prev_cap: int
    next_cap: int
    percent: int


class UserStatsResponse(BaseModel):
    """Profile card: the user plus aggregates and level progress."""

    model_config = ConfigDict(populate_by_name=True)

    user: UserResponse
    visits: int
    avg_rating: float | None = Field(None, alias="avgRating")
    progress: LevelProgress


class StatusResponse(BaseModel):
    status: str
    message: str


def user_response(user: User) -> UserResponse:
    """Build a UserResponse from a User model."""
    return UserResponse(
        id=user.id,
        username=user.username,
        level=user.level or 1,
        points=user.points or 0,
        email=user.email,
        bio=user.bio,
        profile_pic=user.profile_pic,
    )
