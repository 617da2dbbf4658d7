"""Route-level tests: status codes and envelopes over HTTP."""
import pytest
from unittest.mock import AsyncMock, patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api import GooglePlacesAPIClient
from app.handlers import GeocodeHandler, PlacesHandler
from app.routers import (
    geocode_router,
    places_router,
    set_geocode_handler,
    set_places_handler,
)


def _build_app(api_key: str):
    client = GooglePlacesAPIClient(api_key=api_key)
    app = FastAPI()
    app.include_router(places_router)
    app.include_router(geocode_router)
    set_places_handler(PlacesHandler(client))
    set_geocode_handler(GeocodeHandler(client))
    return app, client


@pytest.fixture
def gateway():
    """TestClient plus the provider client whose calls are mocked."""
    app, client = _build_app("router-test-key")
    with patch.object(client, "text_search", new_callable=AsyncMock), \
            patch.object(client, "place_details", new_callable=AsyncMock), \
            patch.object(client, "nearby_search", new_callable=AsyncMock), \
            patch.object(client, "geocode", new_callable=AsyncMock):
        yield TestClient(app), client
    set_places_handler(None)
    set_geocode_handler(None)


@pytest.fixture
def unconfigured_gateway():
    app, client = _build_app("")
    with patch.object(client, "text_search", new_callable=AsyncMock), \
            patch.object(client, "nearby_search", new_callable=AsyncMock):
        yield TestClient(app), client
    set_places_handler(None)
    set_geocode_handler(None)


class TestPlacesRoutes:
    """Tests for /places endpoints."""

    def test_search_example(self, gateway):
        http, client = gateway
        client.text_search.return_value = {
            "status": "OK",
            "results": [
                {
                    "place_id": "ChIJpizza",
                    "name": "Joe's Pizza",
                    "formatted_address": "7 Carmine St",
                    "geometry": {"location": {"lat": 40.73, "lng": -74.0}},
                    "types": ["restaurant"],
                }
            ],
        }

        response = http.get(
            "/places", params={"query": "pizza", "latitude": "40.7", "longitude": "-74.0"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["status"] == "OK"
        assert body["next_page_token"] is None
        assert len(body["results"]) == 1
        place = body["results"][0]
        assert place["location"] == {"lat": 40.73, "lng": -74.0}
        assert place["photos"] == []
        assert place["opening_hours"] is None
        assert place["rating"] is None

    def test_search_type_query_param(self, gateway):
        http, client = gateway
        client.text_search.return_value = {"status": "ZERO_RESULTS", "results": []}

        response = http.get("/places", params={"query": "pizza", "type": "restaurant"})

        assert response.status_code == 200
        assert response.json()["results"] == []
        assert client.text_search.call_args.kwargs["place_type"] == "restaurant"

    def test_search_missing_query(self, gateway):
        http, client = gateway

        response = http.get("/places")

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Query parameter is required"}
        client.text_search.assert_not_called()

    def test_search_upstream_error(self, gateway):
        http, client = gateway
        client.text_search.return_value = {"status": "REQUEST_DENIED", "error_message": "denied"}

        response = http.get("/places", params={"query": "pizza"})

        assert response.status_code == 400
        body = response.json()
        assert body == {
            "success": False,
            "message": "Places API error: REQUEST_DENIED",
            "error": "denied",
        }
        assert "results" not in body

    def test_search_missing_credential(self, unconfigured_gateway):
        http, client = unconfigured_gateway

        response = http.get("/places", params={"query": "pizza"})

        assert response.status_code == 500
        assert response.json()["message"] == (
            "Server configuration error: Google Maps API key is missing"
        )
        client.text_search.assert_not_called()

    def test_details(self, gateway):
        http, client = gateway
        client.place_details.return_value = {"status": "OK", "result": {"name": "Joe's Pizza"}}

        response = http.get("/places/details/ChIJpizza")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["result"]["place_id"] == "ChIJpizza"
        assert body["result"]["reviews"] == []
        assert body["result"]["opening_hours"] is None

    @pytest.mark.parametrize("path", ["/places/details/", "/places/details"])
    def test_details_without_id(self, gateway, path):
        http, client = gateway

        response = http.get(path)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Place ID parameter is required",
        }
        client.place_details.assert_not_called()

    def test_details_unexpected_error(self, gateway):
        http, client = gateway
        client.place_details.side_effect = RuntimeError("boom")

        response = http.get("/places/details/ChIJpizza")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Server error getting place details",
            "error": "boom",
        }

    def test_nearby(self, gateway):
        http, client = gateway
        client.nearby_search.return_value = {
            "status": "OK",
            "results": [{"place_id": "p1", "name": "Cafe", "vicinity": "Main St"}],
            "next_page_token": "NEXT",
        }

        response = http.post(
            "/places", json={"latitude": 40.7, "longitude": -74.0, "keyword": "coffee"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["results"][0]["vicinity"] == "Main St"
        assert body["results"][0]["location"] is None
        assert body["next_page_token"] == "NEXT"
        assert client.nearby_search.call_args.args[2] == 1500

    def test_nearby_missing_coordinates(self, gateway):
        http, client = gateway

        response = http.post("/places", json={"latitude": 40.7})

        assert response.status_code == 400
        assert response.json()["message"] == "Latitude and longitude are required"
        client.nearby_search.assert_not_called()

    def test_nearby_malformed_body(self, gateway):
        http, client = gateway

        response = http.post(
            "/places", content=b"{not json", headers={"content-type": "application/json"}
        )

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Server error during nearby search"
        assert "error" in body
        client.nearby_search.assert_not_called()

    def test_nearby_missing_credential(self, unconfigured_gateway):
        http, client = unconfigured_gateway

        response = http.post("/places", json={"latitude": 40.7, "longitude": -74.0})

        assert response.status_code == 500
        client.nearby_search.assert_not_called()

    @pytest.mark.parametrize("method", ["PUT", "DELETE"])
    def test_mutations_rejected(self, gateway, method):
        http, client = gateway

        response = http.request(method, "/places?query=x", json={"anything": True})

        assert response.status_code == 405
        assert response.json() == {
            "success": False,
            "message": f"{method} method not supported for places API",
        }

    def test_service_not_ready(self):
        app = FastAPI()
        app.include_router(places_router)
        set_places_handler(None)

        response = TestClient(app).get("/places", params={"query": "pizza"})

        assert response.status_code == 503
        assert response.json() == {"success": False, "message": "Service not ready"}


class TestGeocodeRoutes:
    """Tests for /geocode endpoints."""

    def test_geocode(self, gateway):
        http, client = gateway
        client.geocode.return_value = {
            "status": "OK",
            "results": [
                {
                    "formatted_address": "Cedar Rapids, IA 52402, USA",
                    "geometry": {"location": {"lat": 42.0, "lng": -91.6}},
                    "place_id": "ChIJcedar",
                }
            ],
        }

        response = http.get("/geocode", params={"address": "52402"})

        assert response.status_code == 200
        assert response.json()["location"] == {"lat": 42.0, "lng": -91.6}

    def test_geocode_not_found(self, gateway):
        http, client = gateway
        client.geocode.return_value = {"status": "ZERO_RESULTS", "results": []}

        response = http.get("/geocode", params={"address": "nowhere"})

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Geocoding failed: ZERO_RESULTS",
            "error": "No results found",
        }

    def test_batch_geocode(self, gateway):
        http, client = gateway
        client.geocode.return_value = {"status": "ZERO_RESULTS", "results": []}

        response = http.post("/geocode", json={"addresses": ["a", "b"]})

        assert response.status_code == 200
        body = response.json()
        assert body["summary"] == {"total": 2, "successful": 0, "failed": 2}

    def test_batch_geocode_requires_list(self, gateway):
        http, _ = gateway

        response = http.post("/geocode", json={"addresses": "52402"})

        assert response.status_code == 400
        assert response.json()["message"] == "Addresses array is required"

    @pytest.mark.parametrize("method", ["PUT", "DELETE"])
    def test_mutations_rejected(self, gateway, method):
        http, _ = gateway

        response = http.request(method, "/geocode")

        assert response.status_code == 405
        assert response.json()["message"] == f"{method} method not supported for geocode API"
