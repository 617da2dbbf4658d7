"""Dependency injection container for application components."""
import logging

from app.config import Settings
from app.api import GooglePlacesAPIClient
from app.handlers import GeocodeHandler, PlacesHandler

logger = logging.getLogger(__name__)


class Container:
    """Dependency injection container.

    Builds the shared provider client and the handlers that use it.
    """

    def __init__(self, settings: Settings):
        """Initialize container with all dependencies.

        Args:
            settings: Application settings
        """
        logger.info("[Container] Initializing container")
        self.settings = settings

        # The client is created even without a key so the handlers can
        # answer with a configuration error instead of the app failing to start
        self.google_places_api = GooglePlacesAPIClient(
            api_key=settings.google_maps_api_key,
            base_url=settings.google_maps_api_base,
            timeout=settings.google_places_timeout_seconds,
            max_connections=settings.google_places_max_connections,
        )
        if self.google_places_api.is_configured:
            logger.info("[Container] Google Places API client initialized")
        else:
            logger.warning(
                "[Container] GOOGLE_MAPS_API_KEY not configured. "
                "All places and geocode requests will fail with a configuration error."
            )

        # Initialize handlers
        self.places_handler = PlacesHandler(self.google_places_api)
        self.geocode_handler = GeocodeHandler(
            self.google_places_api,
            batch_limit=settings.geocode_batch_limit,
        )

        logger.info("[Container] Container initialized successfully")

    async def shutdown(self):
        """Clean up resources on shutdown."""
        logger.info("[Container] Shutting down container")
        try:
            await self.google_places_api.close()
            logger.info("[Container] Google Places API client closed")
        except Exception as e:
            logger.error(f"[Container] Error closing Google Places API client: {e}")
