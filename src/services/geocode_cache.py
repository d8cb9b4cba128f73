"""Per-artist memoization of geocoded place lists.

The first request for an artist's coordinates extracts its places, geocodes
each one in turn and stores the resulting list under the artist id.  Every
later request for that id is served from memory with no outbound calls.
Entries are never evicted or refreshed; place coordinates are treated as
static for the life of the process.

Failure handling per place:
    - not found (``None``)      -> skipped silently
    - ``GeocodingError``        -> skipped, logged at warning
    - anything else             -> propagates; the batch is not cached

Concurrency:
    The cache is the only mutable state shared between request handlers.
    ``self._lock`` guards both the entry mapping and the in-flight table.
    The first miss for an id schedules one resolution task and records it
    as in flight; concurrent requests for the same id await that task
    instead of starting their own, so an artist is geocoded at most once.
    Waiters are shielded: a client disconnecting does not cancel the batch
    other requests are waiting on.
"""

from __future__ import annotations

import asyncio

import structlog

from src.interfaces.geocoding_provider import IGeocodingProvider
from src.models.artist import AggregatedArtist
from src.models.geo import GeoPoint
from src.services.place_extractor import extract_places
from src.utils.errors import GeocodingError

logger = structlog.get_logger(logger_name=__name__)


def _retrieve_exception(task: asyncio.Task[list[GeoPoint]]) -> None:
    # Waiters may all have been cancelled; mark the failure as observed.
    if not task.cancelled() and task.exception() is not None:
        logger.debug("geocode_batch_failed", error=repr(task.exception()))


class GeocodeCache:
    """Resolve and remember the coordinate list for each artist.

    Parameters
    ----------
    geocoder:
        Provider used for every lookup.  Lookups within one batch are made
        strictly one after another; pacing is the provider's concern.
    batch_timeout:
        Upper bound in seconds on one artist's whole batch, ``0`` for none.
        Places not reached before the deadline are skipped and the partial
        result is returned without being cached, so a later request retries.
    """

    def __init__(self, geocoder: IGeocodingProvider, batch_timeout: float = 0.0) -> None:
        self._geocoder = geocoder
        self._batch_timeout = batch_timeout
        self._entries: dict[int, tuple[GeoPoint, ...]] = {}
        self._in_flight: dict[int, asyncio.Task[list[GeoPoint]]] = {}
        self._lock = asyncio.Lock()

    async def get_or_resolve(self, artist_id: int, artist: AggregatedArtist) -> list[GeoPoint]:
        """Return the cached points for *artist_id*, resolving them on first use."""
        async with self._lock:
            cached = self._entries.get(artist_id)
            if cached is not None:
                logger.debug("geocode_cache_hit", artist_id=artist_id, points=len(cached))
                return list(cached)

            task = self._in_flight.get(artist_id)
            if task is None:
                logger.info("geocode_cache_miss", artist_id=artist_id, artist=artist.name)
                task = asyncio.create_task(self._resolve_and_store(artist_id, artist))
                task.add_done_callback(_retrieve_exception)
                self._in_flight[artist_id] = task
            else:
                logger.debug("geocode_cache_join_in_flight", artist_id=artist_id)

        points = await asyncio.shield(task)
        return list(points)

    def cached_count(self) -> int:
        """Number of artists with a stored result."""
        return len(self._entries)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _resolve_and_store(self, artist_id: int, artist: AggregatedArtist) -> list[GeoPoint]:
        try:
            points, complete = await self._resolve_batch(artist_id, artist)
        except BaseException:
            # Nothing is cached; free the slot so the next request retries.
            self._in_flight.pop(artist_id, None)
            raise

        async with self._lock:
            if complete:
                self._entries[artist_id] = tuple(points)
            self._in_flight.pop(artist_id, None)

        logger.info(
            "geocode_batch_complete",
            artist_id=artist_id,
            points=len(points),
            cached=complete,
        )
        return points

    async def _resolve_batch(
        self, artist_id: int, artist: AggregatedArtist
    ) -> tuple[list[GeoPoint], bool]:
        """Geocode every place of *artist* in turn.

        Returns the found points and whether every place was attempted.
        """
        places = sorted(extract_places(artist))
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._batch_timeout if self._batch_timeout > 0 else None

        points: list[GeoPoint] = []
        for index, place in enumerate(places):
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                self._log_deadline(artist_id, skipped=len(places) - index)
                return points, False

            try:
                if remaining is None:
                    point = await self._geocoder.resolve(place)
                else:
                    point = await asyncio.wait_for(self._geocoder.resolve(place), timeout=remaining)
            except GeocodingError as exc:
                logger.warning(
                    "geocode_failed",
                    artist_id=artist_id,
                    place=place,
                    provider=exc.provider_name,
                    error=exc.message,
                )
                continue
            except asyncio.TimeoutError:
                self._log_deadline(artist_id, skipped=len(places) - index)
                return points, False

            if point is not None:
                points.append(point)

        return points, True

    def _log_deadline(self, artist_id: int, skipped: int) -> None:
        logger.warning(
            "geocode_batch_deadline_exceeded",
            artist_id=artist_id,
            batch_timeout=self._batch_timeout,
            skipped_places=skipped,
        )
