"""Nominatim (OpenStreetMap) provider implementing IGeocodingProvider.

Resolves one free-text place name per request against the Nominatim search
endpoint, asking for a single candidate.  No API key is required, but the
usage policy demands an identifying User-Agent and a low request rate; the
rate is enforced by the shared :class:`IntervalRateLimiter` injected at
construction so that concurrent batches from different requests queue behind
one another instead of each pacing independently.

Nominatim returns coordinates as strings (``"lat": "48.8566"``) while other
deployments and mirrors return numbers; :func:`parse_coordinate` accepts both.
"""

from __future__ import annotations

import asyncio
import math
from typing import Any

import httpx

from src.interfaces.geocoding_provider import IGeocodingProvider
from src.models.geo import GeoPoint
from src.utils.errors import GeocodingError
from src.utils.logging import get_logger
from src.utils.rate_limiter import IntervalRateLimiter

_DEFAULT_TIMEOUT = 10.0


def parse_coordinate(value: Any) -> float | None:
    """Decode a latitude or longitude given as a number or a numeric string.

    Returns ``None`` for anything else: booleans, non-numeric strings,
    missing values and non-finite numbers.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


class NominatimGeocodingProvider(IGeocodingProvider):
    """Geocoding provider backed by the Nominatim search API.

    Parameters
    ----------
    http_client:
        Shared async client; owned and closed by the application.
    rate_limiter:
        Limiter every lookup passes through.  Share one instance across the
        process.
    user_agent:
        Descriptive client identity; must be non-empty.
    base_url:
        Search endpoint.
    timeout:
        Ceiling in seconds on one whole lookup, from sending the request to
        reading the last byte of the body.  Time spent waiting on the rate
        limiter does not count.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        rate_limiter: IntervalRateLimiter,
        user_agent: str,
        base_url: str = "https://nominatim.openstreetmap.org/search",
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        if not user_agent.strip():
            raise ValueError("Nominatim requires a non-empty User-Agent")
        self._http = http_client
        self._limiter = rate_limiter
        self._user_agent = user_agent
        self._base_url = base_url
        self._timeout = timeout
        self._logger = get_logger(__name__)

    # -- IGeocodingProvider implementation -------------------------------------

    async def resolve(self, place: str) -> GeoPoint | None:
        params = {"q": place, "format": "json", "limit": 1}
        headers = {"User-Agent": self._user_agent, "Accept": "application/json"}

        async with self._limiter:
            try:
                # httpx applies its timeout per phase; wait_for bounds the whole lookup.
                response = await asyncio.wait_for(
                    self._http.get(
                        self._base_url, params=params, headers=headers, timeout=self._timeout
                    ),
                    timeout=self._timeout,
                )
                response.raise_for_status()
                candidates = response.json()
            except asyncio.TimeoutError as exc:
                raise GeocodingError(
                    message=f"Lookup for '{place}' exceeded {self._timeout}s",
                    provider_name=self.get_provider_name(),
                ) from exc
            except httpx.HTTPError as exc:
                raise GeocodingError(
                    message=f"Lookup for '{place}' failed: {exc!r}",
                    provider_name=self.get_provider_name(),
                ) from exc
            except ValueError as exc:
                raise GeocodingError(
                    message=f"Lookup for '{place}' returned invalid JSON: {exc}",
                    provider_name=self.get_provider_name(),
                ) from exc

        if not isinstance(candidates, list):
            raise GeocodingError(
                message=f"Lookup for '{place}' returned {type(candidates).__name__}, expected list",
                provider_name=self.get_provider_name(),
            )

        if not candidates:
            self._logger.debug("geocode_not_found", place=place)
            return None

        for candidate in candidates:
            point = self._parse_candidate(place, candidate)
            if point is not None:
                return point

        self._logger.debug("geocode_no_usable_candidate", place=place, candidates=len(candidates))
        return None

    def get_provider_name(self) -> str:
        return "nominatim"

    # -- Private helpers --------------------------------------------------------

    def _parse_candidate(self, place: str, candidate: Any) -> GeoPoint | None:
        if not isinstance(candidate, dict):
            return None
        lat = parse_coordinate(candidate.get("lat"))
        lon = parse_coordinate(candidate.get("lon"))
        if lat is None or lon is None:
            self._logger.debug(
                "geocode_candidate_skipped",
                place=place,
                lat=candidate.get("lat"),
                lon=candidate.get("lon"),
            )
            return None
        return GeoPoint(location=place, lat=lat, lon=lon)
