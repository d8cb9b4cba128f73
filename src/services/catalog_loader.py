"""Startup loading of the artist catalog.

Fetches the four collections concurrently and joins them.  There is no
degraded-start mode: if any fetch fails the :class:`CollectionFetchError`
propagates and the application refuses to start.
"""

from __future__ import annotations

import asyncio

import structlog

from src.interfaces.collection_provider import ICollectionProvider
from src.services.aggregator import ArtistCatalog, build_aggregated_artists
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


async def load_catalog(provider: ICollectionProvider) -> ArtistCatalog:
    """Fetch every collection from *provider* and return the joined catalog.

    Raises
    ------
    src.utils.errors.CollectionFetchError
        If any of the four collections cannot be fetched or decoded.
    """
    _logger.info("catalog_loading", provider=provider.get_provider_name())

    # gather() without return_exceptions: the first failure propagates.
    artists, locations, dates, relations = await asyncio.gather(
        provider.fetch_artists(),
        provider.fetch_locations(),
        provider.fetch_dates(),
        provider.fetch_relations(),
    )

    catalog = ArtistCatalog(build_aggregated_artists(artists, locations, dates, relations))
    _logger.info("catalog_loaded", artists=len(catalog))
    return catalog
