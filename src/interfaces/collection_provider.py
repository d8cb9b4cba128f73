"""Abstract base class for upstream artist-collection providers.

The catalog is assembled from four independently published collections.
A provider fetches and decodes each one; how it does so (HTTP API, fixture
file) is an adapter detail hidden behind this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.artist import ArtistRecord, DateEntry, LocationEntry, RelationEntry


class ICollectionProvider(ABC):
    """Contract for fetching the four artist collections.

    Every method either returns the complete decoded collection or raises
    :class:`src.utils.errors.CollectionFetchError`.  There is no partial
    result: the caller treats any failure as fatal.
    """

    @abstractmethod
    async def fetch_artists(self) -> list[ArtistRecord]:
        """Return every artist profile, in upstream order."""

    @abstractmethod
    async def fetch_locations(self) -> list[LocationEntry]:
        """Return the tour-location entries keyed by artist id."""

    @abstractmethod
    async def fetch_dates(self) -> list[DateEntry]:
        """Return the performance-date entries keyed by artist id."""

    @abstractmethod
    async def fetch_relations(self) -> list[RelationEntry]:
        """Return the place -> dates relation entries keyed by artist id."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier used in logs and errors."""
