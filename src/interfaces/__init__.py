"""Contracts for the external services groupie-tracker depends on.

Business logic talks to upstream services only through these abstract base
classes; concrete adapters live in ``src/providers/`` and are wired up in
``src/main.py``.  Tests inject mocks implementing the same contracts.

    Interface             ->  Implementation
    ---------------------------------------------------------------
    ICollectionProvider   ->  GroupieAPICollectionProvider
    IGeocodingProvider    ->  NominatimGeocodingProvider
"""

from src.interfaces.collection_provider import ICollectionProvider
from src.interfaces.geocoding_provider import IGeocodingProvider

__all__ = ["ICollectionProvider", "IGeocodingProvider"]
