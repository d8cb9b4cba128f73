"""groupie-tracker FastAPI application entry point.

Wires providers, services, and routes together.  Startup runs in the
lifespan handler, in this order:

    1. Create the shared httpx client.
    2. Fetch the four upstream collections and build the artist catalog.
       Any failure here aborts startup; there is no partial-data mode.
    3. Create the rate-limited Nominatim provider and the geocode cache.
    4. Publish catalog and cache on ``app.state`` for the routes.

The client is closed on shutdown.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config import load_config, settings
from src.config.settings import Settings
from src.interfaces.collection_provider import ICollectionProvider
from src.providers.collections.groupie_api_provider import GroupieAPICollectionProvider
from src.providers.geocoding.nominatim_provider import NominatimGeocodingProvider
from src.services.catalog_loader import load_catalog
from src.services.geocode_cache import GeocodeCache
from src.utils.errors import CollectionFetchError, ConfigurationError
from src.utils.logging import configure_logging, get_logger
from src.utils.rate_limiter import IntervalRateLimiter

_APP_VERSION = "0.1.0"

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component assembly
# ---------------------------------------------------------------------------


def _build_geocode_cache(app_settings: Settings, http_client: httpx.AsyncClient) -> GeocodeCache:
    """Build the geocode cache around one shared, paced Nominatim provider."""
    if not app_settings.geocoder_app_name.strip():
        raise ConfigurationError(
            message="GEOCODER_APP_NAME must be set; Nominatim rejects anonymous clients",
            provider_name="nominatim",
        )
    if app_settings.geocoder_pacing_seconds < 0:
        raise ConfigurationError(message="GEOCODER_PACING_SECONDS must not be negative")

    user_agent = app_settings.geocoder_user_agent()
    limiter = IntervalRateLimiter(app_settings.geocoder_pacing_seconds, name="nominatim")
    geocoder = NominatimGeocodingProvider(
        http_client=http_client,
        rate_limiter=limiter,
        user_agent=user_agent,
        base_url=app_settings.geocoder_url,
        timeout=app_settings.geocoder_timeout,
    )
    return GeocodeCache(geocoder, batch_timeout=app_settings.geocode_batch_timeout)


async def _build_all(
    app_settings: Settings,
    collection_provider: ICollectionProvider | None = None,
) -> dict[str, Any]:
    """Construct every component the routes need.

    Raises :class:`CollectionFetchError` if the catalog cannot be loaded.
    """
    http_client = httpx.AsyncClient()
    try:
        provider = collection_provider or GroupieAPICollectionProvider(
            http_client=http_client,
            base_url=app_settings.collections_base_url,
            timeout=app_settings.collections_timeout,
        )
        catalog = await load_catalog(provider)
        geocode_cache = _build_geocode_cache(app_settings, http_client)
    except BaseException:
        await http_client.aclose()
        raise

    return {
        "http_client": http_client,
        "catalog": catalog,
        "geocode_cache": geocode_cache,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Load the catalog on startup, close the HTTP client on shutdown."""
    try:
        components = await _build_all(settings)
    except CollectionFetchError as exc:
        _logger.error(
            "catalog_load_failed",
            provider=exc.provider_name,
            error=exc.message,
        )
        raise

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=_APP_VERSION,
        environment=settings.app_env,
        artists=len(components["catalog"]),
        geocoder_pacing_s=settings.geocoder_pacing_seconds,
    )

    yield

    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    config = load_config(settings=settings)

    application = FastAPI(
        title="groupie-tracker API",
        version=_APP_VERSION,
        description=(
            "Artist profiles joined with their tour locations, dates and "
            "date-location relations, plus on-demand geocoding of every "
            "place an artist has played."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=config.get("api", {}).get("cors_origins"))

    application.include_router(api_router)

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
