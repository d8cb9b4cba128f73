"""Groupie Trackers API provider implementing ICollectionProvider.

Fetches the four artist collections from the public JSON API:

    {base}/artists    -> plain list of artist profiles
    {base}/locations  -> {"index": [{"id", "locations", ...}, ...]}
    {base}/dates      -> {"index": [{"id", "dates"}, ...]}
    {base}/relation   -> {"index": [{"id", "datesLocations"}, ...]}

Either shape (a bare list or an ``index`` wrapper) is accepted for every
collection.  Any transport, status or decode failure raises
:class:`CollectionFetchError`; the catalog loader lets that abort startup.
"""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from src.interfaces.collection_provider import ICollectionProvider
from src.models.artist import ArtistRecord, DateEntry, LocationEntry, RelationEntry
from src.utils.errors import CollectionFetchError
from src.utils.logging import get_logger

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class GroupieAPICollectionProvider(ICollectionProvider):
    """Collection provider backed by the Groupie Trackers JSON API.

    Parameters
    ----------
    http_client:
        Shared async client; owned and closed by the application.
    base_url:
        API root, e.g. ``https://groupietrackers.herokuapp.com/api``.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        timeout: float = 30.0,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._logger = get_logger(__name__)

    # -- ICollectionProvider implementation ------------------------------------

    async def fetch_artists(self) -> list[ArtistRecord]:
        return await self._fetch_collection("artists", ArtistRecord)

    async def fetch_locations(self) -> list[LocationEntry]:
        return await self._fetch_collection("locations", LocationEntry)

    async def fetch_dates(self) -> list[DateEntry]:
        return await self._fetch_collection("dates", DateEntry)

    async def fetch_relations(self) -> list[RelationEntry]:
        return await self._fetch_collection("relation", RelationEntry)

    def get_provider_name(self) -> str:
        return "groupietrackers"

    # -- Private helpers --------------------------------------------------------

    async def _fetch_collection(self, path: str, model: type[_ModelT]) -> list[_ModelT]:
        url = f"{self._base_url}/{path}"
        payload = await self._get_json(url)

        items = self._unwrap_index(payload)
        if items is None:
            raise CollectionFetchError(
                message=f"Unexpected payload shape from {url}: {type(payload).__name__}",
                provider_name=self.get_provider_name(),
            )

        try:
            records = [model.model_validate(item) for item in items]
        except ValidationError as exc:
            raise CollectionFetchError(
                message=f"Could not decode {path} collection: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.info("collection_fetched", collection=path, records=len(records))
        return records

    async def _get_json(self, url: str) -> Any:
        try:
            response = await self._http.get(url, timeout=self._timeout)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise CollectionFetchError(
                message=f"Request to {url} failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValueError as exc:
            raise CollectionFetchError(
                message=f"Response from {url} is not valid JSON: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    @staticmethod
    def _unwrap_index(payload: Any) -> list[Any] | None:
        """Return the record list from a bare list or an ``{"index": [...]}`` wrapper."""
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict) and isinstance(payload.get("index"), list):
            return payload["index"]
        return None
