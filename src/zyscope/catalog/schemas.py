"""Request/response schemas for catalog endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Scores(BaseModel):
    adventure: float | None = None
    study: float | None = None
    travel: float | None = None


class CityResponse(BaseModel):
    name: str
    country: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    lat: float | None = None
    lon: float | None = None
    adventure: float | None = None
    study: float | None = None
    travel: float | None = None
    scores: Scores


class CompareRequest(BaseModel):
    city1: str = Field(..., min_length=1)
    city2: str = Field(..., min_length=1)


class CompareResponse(BaseModel):
    city1: CityResponse
    city2: CityResponse


class Shortcut(BaseModel):
    keys: str
    desc: str


class PlatformNote(BaseModel):
    title: str
    body: str


class HelpResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    shortcuts: list[Shortcut]
    platform_notes: list[PlatformNote] = Field(alias="platformNotes")
    message: str
