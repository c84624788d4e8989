"""Catalog endpoints: city list, side-by-side comparison, help content."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from zyscope.catalog.schemas import (
    CityResponse,
    CompareRequest,
    CompareResponse,
    HelpResponse,
    PlatformNote,
    Shortcut,
)
from zyscope.catalog.service import Catalog, format_city, get_catalog
from zyscope.errors import NotFoundError

router = APIRouter(tags=["Catalog"])

SHORTCUTS: list[dict[str, str]] = [
    {"keys": "Arrow keys", "desc": "Navigate map markers (Explore) and switch focus items."},
    {"keys": "Enter", "desc": "Toggle visited on the active marker (Explore)."},
    {"keys": "Tab / Shift+Tab", "desc": "Move between interactive controls and inputs."},
]

PLATFORM_NOTES: list[dict[str, str]] = [
    {
        "title": "Desktop",
        "body": "Use keyboard navigation for speed. Most interactions support Enter/Space activation.",
    },
    {
        "title": "Mobile",
        "body": "Tap markers and cards; sticky nav keeps primary actions reachable.",
    },
    {
        "title": "Accessibility",
        "body": "High-contrast theme, focusable controls, and semantic headings throughout.",
    },
]


@router.get("/cities", response_model=list[dict[str, Any]])
async def list_cities(catalog: Catalog = Depends(get_catalog)) -> list[dict[str, Any]]:
    """The raw catalog, as shipped."""
    return catalog.entries


@router.post("/compare", response_model=CompareResponse)
async def compare(
    body: CompareRequest,
    catalog: Catalog = Depends(get_catalog),
) -> CompareResponse:
    """Scores for two destinations side by side."""
    first = catalog.find(body.city1)
    second = catalog.find(body.city2)
    if first is None or second is None:
        msg = "One or both countries were not found."
        raise NotFoundError(msg)

    return CompareResponse(
        city1=CityResponse(**format_city(first)),
        city2=CityResponse(**format_city(second)),
    )


@router.get("/help", response_model=HelpResponse)
async def help_content() -> HelpResponse:
    """Keyboard shortcuts and per-platform notes for the client's help panel."""
    return HelpResponse(
        shortcuts=[Shortcut(**s) for s in SHORTCUTS],
        platform_notes=[PlatformNote(**n) for n in PLATFORM_NOTES],
        message="Live help available",
    )
