"""Abstract base class for geocoding providers.

Defines the single-place lookup used by the geocode cache to turn free-text
place names into coordinates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.geo import GeoPoint


class IGeocodingProvider(ABC):
    """Contract for resolving one place name to a coordinate pair."""

    @abstractmethod
    async def resolve(self, place: str) -> GeoPoint | None:
        """Look up *place* and return its coordinates.

        Parameters
        ----------
        place:
            A non-empty, trimmed place name.  Matching is exact: the
            returned point carries *place* unchanged as its ``location``.

        Returns
        -------
        GeoPoint or None
            ``None`` when the service knows no such place (not an error).

        Raises
        ------
        src.utils.errors.GeocodingError
            If the request fails in transport or the response cannot be
            decoded.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier used in logs and errors."""
