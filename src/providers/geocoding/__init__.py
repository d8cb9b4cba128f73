"""Geocoding providers.

NominatimGeocodingProvider is the only implementation; the interface exists
so the geocode cache can be tested against a counting stub.
"""

from src.providers.geocoding.nominatim_provider import (
    NominatimGeocodingProvider,
    parse_coordinate,
)

__all__ = ["NominatimGeocodingProvider", "parse_coordinate"]
