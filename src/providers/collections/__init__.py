"""Upstream artist-collection providers.

GroupieAPICollectionProvider reads the four collections from the public
Groupie Trackers JSON API.  Tests substitute a mock implementing
ICollectionProvider.
"""

from src.providers.collections.groupie_api_provider import GroupieAPICollectionProvider

__all__ = ["GroupieAPICollectionProvider"]
