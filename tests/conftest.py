"""Shared pytest fixtures for the groupie-tracker test suite."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.collection_provider import ICollectionProvider
from src.interfaces.geocoding_provider import IGeocodingProvider
from src.models.artist import (
    AggregatedArtist,
    ArtistRecord,
    DateEntry,
    LocationEntry,
    RelationEntry,
)
from src.models.geo import GeoPoint
from src.services.aggregator import ArtistCatalog, build_aggregated_artists
from src.utils.errors import GeocodingError


# ---------------------------------------------------------------------------
# Stub geocoder
# ---------------------------------------------------------------------------


class StubGeocoder(IGeocodingProvider):
    """In-memory geocoder that records every lookup.

    ``known`` maps place name -> (lat, lon).  Names in ``failing`` raise
    GeocodingError; everything else is "not found".  Set ``gate`` to an
    asyncio.Event to hold lookups until the test releases them.
    """

    def __init__(
        self,
        known: dict[str, tuple[float, float]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.known = known or {}
        self.failing = failing or set()
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def resolve(self, place: str) -> GeoPoint | None:
        self.calls.append(place)
        if self.gate is not None:
            await self.gate.wait()
        if place in self.failing:
            raise GeocodingError(message=f"timeout for {place}", provider_name="stub")
        coords = self.known.get(place)
        if coords is None:
            return None
        return GeoPoint(location=place, lat=coords[0], lon=coords[1])

    def get_provider_name(self) -> str:
        return "stub"


@pytest.fixture
def stub_geocoder() -> StubGeocoder:
    """Geocoder resolving paris and london; Berlin is unknown."""
    return StubGeocoder(known={"paris": (48.85, 2.35), "london": (51.5, -0.12)})


# ---------------------------------------------------------------------------
# Collection fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_artists() -> list[ArtistRecord]:
    return [
        ArtistRecord(
            id=1,
            name="Queen",
            image="https://groupietrackers.herokuapp.com/api/images/queen.jpeg",
            members=["Freddie Mercury", "Brian May", "John Deacon", "Roger Taylor"],
            creationDate=1970,
            firstAlbum="14-12-1973",
            relations="https://groupietrackers.herokuapp.com/api/relation/1",
        ),
        ArtistRecord(
            id=7,
            name="Pink Floyd",
            image="https://groupietrackers.herokuapp.com/api/images/pinkfloyd.jpeg",
            members=["Roger Waters", "David Gilmour"],
            creationDate=1965,
            firstAlbum="05-08-1967",
            relations="https://groupietrackers.herokuapp.com/api/relation/7",
        ),
        ArtistRecord(
            id=12,
            name="Gorillaz",
            members=["Damon Albarn"],
            creationDate=1998,
            firstAlbum="26-03-2001",
        ),
    ]


@pytest.fixture
def sample_locations() -> list[LocationEntry]:
    return [
        LocationEntry(id=1, locations=["north_carolina-usa", "osaka-japan"]),
        LocationEntry(id=7, locations=["paris", "london"]),
    ]


@pytest.fixture
def sample_dates() -> list[DateEntry]:
    return [
        DateEntry(id=1, dates=["*23-08-2019", "22-08-2019"]),
        DateEntry(id=7, dates=["01-06-2020"]),
    ]


@pytest.fixture
def sample_relations() -> list[RelationEntry]:
    return [
        RelationEntry(id=1, datesLocations={"osaka-japan": ["22-08-2019"]}),
        RelationEntry(id=7, datesLocations={"Berlin": ["01-06-2020"]}),
    ]


@pytest.fixture
def aggregated_artists(
    sample_artists: list[ArtistRecord],
    sample_locations: list[LocationEntry],
    sample_dates: list[DateEntry],
    sample_relations: list[RelationEntry],
) -> list[AggregatedArtist]:
    return build_aggregated_artists(sample_artists, sample_locations, sample_dates, sample_relations)


@pytest.fixture
def catalog(aggregated_artists: list[AggregatedArtist]) -> ArtistCatalog:
    return ArtistCatalog(aggregated_artists)


@pytest.fixture
def mock_collection_provider(
    sample_artists: list[ArtistRecord],
    sample_locations: list[LocationEntry],
    sample_dates: list[DateEntry],
    sample_relations: list[RelationEntry],
) -> ICollectionProvider:
    """Mock ICollectionProvider serving the sample collections."""
    mock = MagicMock(spec=ICollectionProvider)
    mock.get_provider_name.return_value = "mock-collections"
    mock.fetch_artists = AsyncMock(return_value=sample_artists)
    mock.fetch_locations = AsyncMock(return_value=sample_locations)
    mock.fetch_dates = AsyncMock(return_value=sample_dates)
    mock.fetch_relations = AsyncMock(return_value=sample_relations)
    return mock
