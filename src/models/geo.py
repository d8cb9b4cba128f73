"""Geographic models produced by geocoding."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GeoPoint(BaseModel):
    """A place name resolved to a latitude/longitude pair.

    Also the wire shape of one element of ``/api/artist_locations``.
    """

    model_config = ConfigDict(frozen=True)

    location: str   # The place name exactly as it was looked up
    lat: float
    lon: float
