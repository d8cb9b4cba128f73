"""Pydantic response schemas for the groupie-tracker API.

Artist listings reuse :class:`src.models.artist.AggregatedArtist` and
coordinate lists reuse :class:`src.models.geo.GeoPoint` directly; only the
shapes that exist purely for the HTTP layer live here.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    artists: int = Field(ge=0, description="Artists in the loaded catalog")
    cached_artists: int = Field(ge=0, description="Artists with geocoded locations cached")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
