"""Explore (record a visit) and visit history endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from zyscope.catalog.schemas import CityResponse
from zyscope.catalog.service import Catalog, format_city, get_catalog
from zyscope.database import get_session
from zyscope.db.base import MAX_INTEGER
from zyscope.errors import LocationNotFoundError, UserNotFoundError
from zyscope.users.schemas import UserProgressSummary
from zyscope.users.service import get_user
from zyscope.visits.schemas import (
    ExploreRequest,
    ExploreResponse,
    VisitEntry,
    VisitsResponse,
    VisitSummary,
)
from zyscope.visits.service import get_visits, record_visit

router = APIRouter(tags=["Visits"])


@router.post("/explore", response_model=ExploreResponse)
async def explore(
    body: ExploreRequest,
    db: AsyncSession = Depends(get_session),
    catalog: Catalog = Depends(get_catalog),
) -> ExploreResponse:
    """Record a visit to a catalog location; awards 25 points."""
    if await get_user(db, body.user_id) is None:
        raise UserNotFoundError
    city = catalog.find(body.location)
    if city is None:
        raise LocationNotFoundError

    user, visit = await record_visit(db, body.user_id, city["name"])
    await db.commit()

    return ExploreResponse(
        user=UserProgressSummary(id=user.id, username=user.username, points=user.points, level=user.level),
        city=CityResponse(**format_city(city)),
        visit=VisitSummary(id=visit.id, visited_at=visit.visited_at, location=visit.location),
    )


@router.get("/visits", response_model=VisitsResponse)
async def list_visits(
    user_id: int = Query(..., gt=0, le=MAX_INTEGER),
    db: AsyncSession = Depends(get_session),
    catalog: Catalog = Depends(get_catalog),
) -> VisitsResponse:
    """A user's visits, newest first, each with its catalog entry."""
    user = await get_user(db, user_id)
    if user is None:
        raise UserNotFoundError

    visits = await get_visits(db, user_id)
    entries = []
    for v in visits:
        city = catalog.find(v.location)
        entries.append(VisitEntry(
            id=v.id,
            user_id=v.user_id,
            location=v.location,
            visited_at=v.visited_at,
            city=CityResponse(**format_city(city)) if city else None,
        ))

    return VisitsResponse(
        user=UserProgressSummary(
            id=user.id, username=user.username, level=user.level or 1, points=user.points or 0,
        ),
        visits=entries,
    )
