"""Artist domain models for the groupie-tracker catalog.

Pydantic v2 models for the four upstream collections and for the joined
record built from them.  All models are frozen: the catalog is built once at
startup and shared read-only between request handlers.

Upstream JSON uses camelCase (``creationDate``, ``datesLocations``); the
models accept those names through aliases and FastAPI serializes them back
out by alias, so ``/api/artists`` keeps the upstream field names.

Key relationships:
    - ArtistRecord is the driving collection; its ``id`` is the join key.
    - LocationEntry, DateEntry and RelationEntry are optional per artist.
    - AggregatedArtist = ArtistRecord + the three optional entries, with
      absent entries degraded to empty values (see src/services/aggregator.py).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ArtistRecord(BaseModel):
    """One artist profile as published by the artists collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int                                            # Externally assigned, unique
    name: str
    image: str = ""                                    # Image URL
    members: list[str] = Field(default_factory=list)   # Ordered member names
    creation_date: int = Field(default=0, alias="creationDate")
    first_album: str = Field(default="", alias="firstAlbum")  # e.g. "14-03-1973"
    relations: str = ""                                # URL of the relations document


class LocationEntry(BaseModel):
    """Tour locations for one artist, in upstream order (e.g. ``"london-uk"``)."""

    model_config = ConfigDict(frozen=True)

    id: int
    locations: list[str] = Field(default_factory=list)


class DateEntry(BaseModel):
    """Performance dates for one artist, in upstream order."""

    model_config = ConfigDict(frozen=True)

    id: int
    dates: list[str] = Field(default_factory=list)


class RelationEntry(BaseModel):
    """Place name -> dates performed there, for one artist."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    dates_locations: dict[str, list[str]] = Field(
        default_factory=dict, alias="datesLocations"
    )


class AggregatedArtist(ArtistRecord):
    """An ArtistRecord joined with its locations, dates and relations.

    Every field is always present: an artist with no matching entry in one
    of the other collections gets an empty list or mapping, never ``None``.
    """

    locations: list[str] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)
    dates_locations: dict[str, list[str]] = Field(
        default_factory=dict, alias="datesLocations"
    )
