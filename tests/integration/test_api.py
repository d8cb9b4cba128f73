"""Integration tests for the API endpoints using TestClient."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from src.api.routes import router as api_router
from src.interfaces.geocoding_provider import IGeocodingProvider
from src.models.geo import GeoPoint
from src.services.aggregator import ArtistCatalog
from src.services.geocode_cache import GeocodeCache
from src.utils.errors import ConfigurationError
from tests.conftest import StubGeocoder


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _create_test_app(catalog: ArtistCatalog, geocoder: IGeocodingProvider) -> FastAPI:
    """Create an app wired like main.create_app, minus the upstream fetch."""
    app = FastAPI(version="0.1.0-test")
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(api_router)
    app.state.catalog = catalog
    app.state.geocode_cache = GeocodeCache(geocoder)
    return app


@pytest.fixture
def client(catalog: ArtistCatalog, stub_geocoder: StubGeocoder) -> Iterator[TestClient]:
    with TestClient(_create_test_app(catalog, stub_geocoder)) as test_client:
        yield test_client


# ======================================================================
# /api/artists
# ======================================================================


class TestArtists:
    def test_lists_all_artists_in_order(self, client: TestClient) -> None:
        response = client.get("/api/artists")

        assert response.status_code == 200
        body = response.json()
        assert [a["id"] for a in body] == [1, 7, 12]

    def test_uses_upstream_field_names(self, client: TestClient) -> None:
        pink_floyd = client.get("/api/artists").json()[1]

        assert pink_floyd["creationDate"] == 1965
        assert pink_floyd["firstAlbum"] == "05-08-1967"
        assert pink_floyd["locations"] == ["paris", "london"]
        assert pink_floyd["dates"] == ["01-06-2020"]
        assert pink_floyd["datesLocations"] == {"Berlin": ["01-06-2020"]}

    def test_artist_without_extras_has_empty_fields(self, client: TestClient) -> None:
        gorillaz = client.get("/api/artists").json()[2]

        assert gorillaz["locations"] == []
        assert gorillaz["dates"] == []
        assert gorillaz["datesLocations"] == {}

    def test_search_filters_by_name(self, client: TestClient) -> None:
        response = client.get("/api/artists", params={"search": "queen"})

        assert response.status_code == 200
        assert [a["name"] for a in response.json()] == ["Queen"]

    def test_get_single_artist(self, client: TestClient) -> None:
        response = client.get("/api/artists/7")

        assert response.status_code == 200
        assert response.json()["name"] == "Pink Floyd"

    def test_get_single_artist_not_found(self, client: TestClient) -> None:
        assert client.get("/api/artists/999").status_code == 404


# ======================================================================
# /api/artist_locations
# ======================================================================


class TestArtistLocations:
    def test_returns_resolved_places(self, client: TestClient, stub_geocoder: StubGeocoder) -> None:
        response = client.get("/api/artist_locations", params={"id": "7"})

        assert response.status_code == 200
        body = sorted(response.json(), key=lambda p: p["location"])
        assert body == [
            {"location": "london", "lat": 51.5, "lon": -0.12},
            {"location": "paris", "lat": 48.85, "lon": 2.35},
        ]
        assert sorted(stub_geocoder.calls) == ["Berlin", "london", "paris"]

    def test_repeat_request_makes_no_new_lookups(
        self, client: TestClient, stub_geocoder: StubGeocoder
    ) -> None:
        first = client.get("/api/artist_locations", params={"id": 7}).json()
        calls = len(stub_geocoder.calls)
        second = client.get("/api/artist_locations", params={"id": 7}).json()

        assert second == first
        assert len(stub_geocoder.calls) == calls

    def test_missing_id_is_400(self, client: TestClient) -> None:
        response = client.get("/api/artist_locations")

        assert response.status_code == 400
        assert response.json()["detail"] == "missing id"

    def test_non_integer_id_is_400(self, client: TestClient) -> None:
        response = client.get("/api/artist_locations", params={"id": "seven"})

        assert response.status_code == 400
        assert response.json()["detail"] == "invalid id"

    @pytest.mark.parametrize("raw_id", ["1_0", " 7 ", "٧", "7.0", "0x7", "+"])
    def test_loosely_formatted_id_is_400(
        self, client: TestClient, stub_geocoder: StubGeocoder, raw_id: str
    ) -> None:
        response = client.get("/api/artist_locations", params={"id": raw_id})

        assert response.status_code == 400
        assert response.json()["detail"] == "invalid id"
        assert stub_geocoder.calls == []

    def test_signed_id_is_accepted(self, client: TestClient) -> None:
        response = client.get("/api/artist_locations", params={"id": "+12"})

        assert response.status_code == 200
        assert response.json() == []

    def test_unknown_artist_is_404(self, client: TestClient, stub_geocoder: StubGeocoder) -> None:
        response = client.get("/api/artist_locations", params={"id": 404})

        assert response.status_code == 404
        assert stub_geocoder.calls == []

    def test_artist_without_places_returns_empty_list(self, client: TestClient) -> None:
        response = client.get("/api/artist_locations", params={"id": 12})

        assert response.status_code == 200
        assert response.json() == []

    def test_application_error_is_500_json(self, catalog: ArtistCatalog) -> None:
        class MisconfiguredGeocoder(StubGeocoder):
            async def resolve(self, place: str) -> GeoPoint | None:
                raise ConfigurationError("geocoder not configured")

        with TestClient(_create_test_app(catalog, MisconfiguredGeocoder())) as client:
            response = client.get("/api/artist_locations", params={"id": 7})

        assert response.status_code == 500
        assert response.json() == {
            "error": "ConfigurationError",
            "detail": "geocoder not configured",
        }

    def test_unexpected_error_is_500_json(self, catalog: ArtistCatalog) -> None:
        class BrokenGeocoder(StubGeocoder):
            async def resolve(self, place: str) -> GeoPoint | None:
                raise RuntimeError("bug")

        with TestClient(_create_test_app(catalog, BrokenGeocoder())) as client:
            response = client.get("/api/artist_locations", params={"id": 7})

        assert response.status_code == 500
        assert response.json()["error"] == "InternalServerError"


# ======================================================================
# /api/health
# ======================================================================


class TestHealth:
    def test_reports_catalog_and_cache_sizes(self, client: TestClient) -> None:
        client.get("/api/artist_locations", params={"id": 7})
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "version": "0.1.0-test",
            "artists": 3,
            "cached_artists": 1,
        }
