"""Static destination catalog.

Read-only reference data (name, country, coordinates and adventure/study/
travel scores). Loaded once per path; lookups are case-insensitive on the
trimmed name.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import structlog

from zyscope.config import get_settings

logger = structlog.get_logger()


class Catalog:
    """In-memory index over the catalog entries."""

    def __init__(self, entries: list[dict[str, Any]]) -> None:
        self.entries = entries
        self._by_name = {e["name"].strip().lower(): e for e in entries}

    def find(self, name: object) -> dict[str, Any] | None:
        """Entry whose name matches ``name`` ignoring case and surrounding spaces."""
        if not isinstance(name, str) or not name.strip():
            return None
        return self._by_name.get(name.strip().lower())

    def __len__(self) -> int:
        return len(self.entries)


def format_city(city: dict[str, Any]) -> dict[str, Any]:
    """Response shape for a catalog entry, with both coordinate spellings."""
    lat = city.get("lat", city.get("latitude"))
    lon = city.get("lon", city.get("longitude"))
    return {
        "name": city["name"],
        "country": city.get("country"),
        "latitude": lat,
        "longitude": lon,
        "lat": lat,
        "lon": lon,
        "adventure": city.get("adventure"),
        "study": city.get("study"),
        "travel": city.get("travel"),
        "scores": {
            "adventure": city.get("adventure"),
            "study": city.get("study"),
            "travel": city.get("travel"),
        },
    }


@lru_cache
def load_catalog(path: str = "") -> Catalog:
    """Load the catalog from ``path``, or the bundled ``data/cities.json``."""
    if path:
        raw = Path(path).read_text(encoding="utf-8")
    else:
        raw = resources.files("zyscope.data").joinpath("cities.json").read_text(encoding="utf-8")
    entries = json.loads(raw)
    logger.info("catalog_loaded", source=path or "bundled", entries=len(entries))
    return Catalog(entries)


def get_catalog() -> Catalog:
    """Catalog for the configured path (FastAPI dependency)."""
    return load_catalog(get_settings().catalog_path)
