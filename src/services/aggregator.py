"""Join the four upstream collections into one record per artist.

``build_aggregated_artists`` runs once at startup.  The resulting list is
wrapped in an :class:`ArtistCatalog`, which request handlers share read-only
for the life of the process.

Design pattern: pure function plus an immutable lookup object; no locking is
needed because nothing here is mutated after construction.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

import structlog

from src.models.artist import (
    AggregatedArtist,
    ArtistRecord,
    DateEntry,
    LocationEntry,
    RelationEntry,
)

logger = structlog.get_logger(logger_name=__name__)


def build_aggregated_artists(
    artists: Sequence[ArtistRecord],
    locations: Iterable[LocationEntry],
    dates: Iterable[DateEntry],
    relations: Iterable[RelationEntry],
) -> list[AggregatedArtist]:
    """Return one AggregatedArtist per artist, in the order of *artists*.

    Artists without a locations, dates or relations entry get an empty list
    or mapping for it.  Entries whose id matches no artist are ignored.  If
    a collection repeats an id, its last entry wins.

    Artist ids are assumed unique; this is not re-checked.
    """
    locations_by_id = {entry.id: entry.locations for entry in locations}
    dates_by_id = {entry.id: entry.dates for entry in dates}
    relations_by_id = {entry.id: entry.dates_locations for entry in relations}

    aggregated = [
        AggregatedArtist(
            **artist.model_dump(),
            locations=list(locations_by_id.get(artist.id, [])),
            dates=list(dates_by_id.get(artist.id, [])),
            dates_locations={
                place: list(when) for place, when in relations_by_id.get(artist.id, {}).items()
            },
        )
        for artist in artists
    ]

    logger.debug(
        "artists_aggregated",
        artists=len(aggregated),
        with_locations=sum(1 for a in aggregated if a.locations),
        with_relations=sum(1 for a in aggregated if a.dates_locations),
    )
    return aggregated


class ArtistCatalog:
    """Read-only view over the aggregated artists.

    Keeps the upstream order for listing and an id index for lookups.
    """

    def __init__(self, artists: Iterable[AggregatedArtist]) -> None:
        self._artists: tuple[AggregatedArtist, ...] = tuple(artists)
        self._by_id: dict[int, AggregatedArtist] = {a.id: a for a in self._artists}

    def __len__(self) -> int:
        return len(self._artists)

    def __iter__(self) -> Iterator[AggregatedArtist]:
        return iter(self._artists)

    def all(self) -> list[AggregatedArtist]:
        return list(self._artists)

    def get(self, artist_id: int) -> AggregatedArtist | None:
        return self._by_id.get(artist_id)

    def search(self, query: str) -> list[AggregatedArtist]:
        """Return artists whose name contains *query*, ignoring case.

        An empty or blank query matches everything.
        """
        needle = query.strip().lower()
        if not needle:
            return self.all()
        return [a for a in self._artists if needle in a.name.lower()]
