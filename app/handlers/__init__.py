"""Handlers package."""
from app.handlers.places_handler import PlacesHandler
from app.handlers.geocode_handler import GeocodeHandler

__all__ = ["PlacesHandler", "GeocodeHandler"]
