"""groupie-tracker domain models.

    - artist.py -- the four upstream collections and the joined AggregatedArtist
    - geo.py    -- GeoPoint, one geocoded place
"""

from src.models.artist import (
    AggregatedArtist,
    ArtistRecord,
    DateEntry,
    LocationEntry,
    RelationEntry,
)
from src.models.geo import GeoPoint

__all__ = [
    "AggregatedArtist",
    "ArtistRecord",
    "DateEntry",
    "GeoPoint",
    "LocationEntry",
    "RelationEntry",
]
