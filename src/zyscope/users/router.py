"""User endpoints: login, social signup, profile, deletion."""

from __future__ import annotations

import secrets
import string
import time

import structlog
from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from zyscope.database import get_session
from zyscope.db.base import MAX_INTEGER
from zyscope.errors import UserNotFoundError
from zyscope.gamification.progression import level_progress
from zyscope.users.schemas import (
    DeleteUserRequest,
    LevelProgress,
    LoginRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    SocialLoginResponse,
    StatusResponse,
    UserResponse,
    UserStatsResponse,
    user_response,
)
from zyscope.users.service import (
    create_user,
    delete_user,
    get_or_create_user,
    get_user,
    get_user_average_rating,
    get_user_visit_count,
    update_user_profile,
)

logger = structlog.get_logger()

router = APIRouter(tags=["Users"])

_GUEST_ALPHABET = string.ascii_lowercase + string.digits


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_guest_username() -> str:
    """``guest_<epoch ms>_<6 base36 chars>``; collisions are unlikely, not impossible."""
    suffix = "".join(secrets.choice(_GUEST_ALPHABET) for _ in range(6))
    return f"guest_{_now_ms()}_{suffix}"


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


@router.post("/user/login", response_model=UserResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    """Create the user on first login, or return the existing one."""
    username = body.username or generate_guest_username()
    user, created = await get_or_create_user(db, username)
    await db.commit()
    logger.info("user_login", user_id=user.id, created=created)
    return user_response(user)


@router.post("/api/auth/{provider}", response_model=SocialLoginResponse)
async def social_login(
    provider: str = Path(..., pattern=r"^[A-Za-z0-9_-]{1,32}$"),
    db: AsyncSession = Depends(get_session),
) -> SocialLoginResponse:
    """Demo social sign-in: creates a fresh ``<provider>_<ms>`` account.

    No provider token is verified.
    """
    user = await create_user(db, f"{provider}_{_now_ms()}")
    await db.commit()
    return SocialLoginResponse(user={**user_response(user).model_dump(), "provider": provider})


@router.post("/user/logout", response_model=StatusResponse)
async def logout() -> StatusResponse:
    """Sessions are client-side; nothing to revoke."""
    return StatusResponse(status="ok", message="Logged out")


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


@router.get("/users/{user_id}", response_model=UserStatsResponse)
async def get_profile(
    user_id: int = Path(..., gt=0, le=MAX_INTEGER),
    db: AsyncSession = Depends(get_session),
) -> UserStatsResponse:
    """Profile card with visit count, average rating and level progress."""
    user = await get_user(db, user_id)
    if user is None:
        raise UserNotFoundError

    return UserStatsResponse(
        user=user_response(user),
        visits=await get_user_visit_count(db, user.id),
        avg_rating=await get_user_average_rating(db, user.id),
        progress=LevelProgress(**level_progress(user.points or 0, user.level or 1)),
    )


@router.put("/user/update", response_model=ProfileResponse)
async def update_profile(
    body: ProfileUpdateRequest,
    db: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    """Replace username, email, bio and profile picture."""
    user = await update_user_profile(
        db,
        body.user_id,
        username=body.username,
        email=body.email,
        bio=body.bio,
        profile_pic=body.profile_pic,
    )
    await db.commit()
    return ProfileResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        bio=user.bio,
        profile_pic=user.profile_pic,
        level=user.level or 1,
        points=user.points or 0,
    )


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------


@router.delete("/user/delete", response_model=StatusResponse)
async def delete_account(
    body: DeleteUserRequest,
    db: AsyncSession = Depends(get_session),
) -> StatusResponse:
    """Delete the account with its visits and reviews."""
    if await get_user(db, body.user_id) is None:
        raise UserNotFoundError
    await delete_user(db, body.user_id)
    await db.commit()
    return StatusResponse(status="ok", message="User deleted")
