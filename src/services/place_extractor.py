"""Derive the set of place names to geocode for one artist."""

from __future__ import annotations

from src.models.artist import AggregatedArtist


def extract_places(artist: AggregatedArtist) -> set[str]:
    """Return the artist's distinct, non-blank place names.

    Combines the tour locations with the keys of the relation mapping.
    Names are whitespace-trimmed and compared exactly, so ``"Paris"`` and
    ``"paris"`` are two places.  Iteration order is not meaningful.
    """
    candidates = [*artist.locations, *artist.dates_locations.keys()]
    return {name.strip() for name in candidates if name.strip()}
