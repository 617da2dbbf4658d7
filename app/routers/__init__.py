"""Routers package."""
from app.routers.places_router import router as places_router, set_places_handler
from app.routers.geocode_router import router as geocode_router, set_geocode_handler

__all__ = ["places_router", "set_places_handler", "geocode_router", "set_geocode_handler"]
