"""FastAPI routes for the groupie-tracker JSON API.

# Endpoint                          Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/artists                      GET     Every aggregated artist (?search= filters by name)
# /api/artists/{artist_id}          GET     One aggregated artist
# /api/artist_locations?id=<int>    GET     Geocoded tour places for one artist
# /api/health                       GET     Liveness + catalog / cache sizes
#
# The catalog and the geocode cache are built at startup (main.py lifespan),
# stored on ``app.state`` and injected here through ``Depends``.
"""

from __future__ import annotations

import re
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from src.api.schemas import HealthResponse
from src.models.artist import AggregatedArtist
from src.models.geo import GeoPoint
from src.services.aggregator import ArtistCatalog
from src.services.geocode_cache import GeocodeCache
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api")

_ARTIST_ID_RE = re.compile(r"[+-]?[0-9]+")


def _get_catalog(request: Request) -> ArtistCatalog:
    return request.app.state.catalog


def _get_geocode_cache(request: Request) -> GeocodeCache:
    return request.app.state.geocode_cache


CatalogDep = Annotated[ArtistCatalog, Depends(_get_catalog)]
GeocodeCacheDep = Annotated[GeocodeCache, Depends(_get_geocode_cache)]


def _parse_artist_id(raw: str | None) -> int:
    """Validate the ``id`` query parameter, raising 400 when unusable.

    Only an optional sign followed by ASCII digits is accepted; padding,
    underscores and other Unicode digits are rejected.
    """
    if not raw:
        raise HTTPException(status_code=400, detail="missing id")
    if _ARTIST_ID_RE.fullmatch(raw) is None:
        raise HTTPException(status_code=400, detail="invalid id")
    return int(raw)


@router.get("/artists", response_model=list[AggregatedArtist])
async def list_artists(
    catalog: CatalogDep,
    search: Annotated[str | None, Query(max_length=200)] = None,
) -> list[AggregatedArtist]:
    """Return every artist, or only those whose name contains ``search``."""
    if search:
        return catalog.search(search)
    return catalog.all()


@router.get("/artists/{artist_id}", response_model=AggregatedArtist)
async def get_artist(artist_id: int, catalog: CatalogDep) -> AggregatedArtist:
    artist = catalog.get(artist_id)
    if artist is None:
        raise HTTPException(status_code=404, detail="artist not found")
    return artist


@router.get("/artist_locations", response_model=list[GeoPoint])
async def artist_locations(
    catalog: CatalogDep,
    geocode_cache: GeocodeCacheDep,
    raw_id: Annotated[str | None, Query(alias="id")] = None,
) -> list[GeoPoint]:
    """Return the coordinates of every place the artist has played.

    The first request for an artist geocodes its places one by one and may
    take a while; later requests are answered from the cache.  Places the
    geocoder cannot resolve are left out rather than reported as errors.
    """
    artist_id = _parse_artist_id(raw_id)
    artist = catalog.get(artist_id)
    if artist is None:
        _logger.info("artist_not_found", artist_id=artist_id)
        raise HTTPException(status_code=404, detail="artist not found")

    return await geocode_cache.get_or_resolve(artist_id, artist)


@router.get("/health", response_model=HealthResponse)
async def health(
    request: Request,
    catalog: CatalogDep,
    geocode_cache: GeocodeCacheDep,
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=request.app.version,
        artists=len(catalog),
        cached_artists=geocode_cache.cached_count(),
    )
