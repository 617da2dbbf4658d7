"""Simple startup test to verify application initialization.

Tests that all components can be imported and wired without a real
Google Maps API key or network access.
"""
import logging

import pytest
from fastapi.testclient import TestClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def test_config_loading(monkeypatch):
    """Test that configuration can be loaded."""
    from app.config import Settings

    monkeypatch.delenv("CONFIG_FILE", raising=False)
    logger.info("Testing config loading...")

    settings = Settings(_env_file=None)

    assert settings.google_maps_api_base == "https://maps.googleapis.com/maps/api"
    assert settings.google_places_timeout_seconds > 0
    assert settings.server_port > 0

    logger.info("✓ Config loading successful")


def test_handler_imports():
    """Test that all handler and router modules can be imported."""
    from app.handlers import PlacesHandler, GeocodeHandler
    from app.routers import places_router, geocode_router

    assert PlacesHandler is not None
    assert GeocodeHandler is not None
    assert places_router.routes
    assert geocode_router.routes


@pytest.mark.asyncio
async def test_container_wiring():
    """Test that the container builds handlers sharing one client."""
    from app.config import Settings
    from app.container import Container

    container = Container(Settings(_env_file=None, google_maps_api_key="startup-key"))

    assert container.places_handler.places_client is container.google_places_api
    assert container.geocode_handler.places_client is container.google_places_api
    assert container.google_places_api.is_configured

    await container.shutdown()


def test_app_lifespan_health_and_metrics():
    """Test the full app: lifespan wiring, health and metrics endpoints."""
    from main import app

    with TestClient(app) as client:
        assert client.get("/health").json() == {"status": "healthy"}

        metrics = client.get("/metrics")
        assert metrics.status_code == 200
        assert "gateway_outcomes_total" in metrics.text

        # Handlers are injected; a missing query is rejected before any call
        response = client.get("/places")
        assert response.status_code == 400
        assert response.json()["success"] is False
