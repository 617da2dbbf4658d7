"""Geocoding data models."""
from typing import Any, Optional

from pydantic import BaseModel, Field

from app.models.place import Location


class GeocodeResponse(BaseModel):
    """First geocoding match for a single address."""
    success: bool = True
    location: Optional[Location] = None
    formatted_address: Optional[str] = None
    address_components: Optional[list[dict[str, Any]]] = None
    place_id: Optional[str] = None

    @classmethod
    def from_google(cls, data: dict) -> "GeocodeResponse":
        return cls(
            location=Location.from_geometry(data.get("geometry")),
            formatted_address=data.get("formatted_address"),
            address_components=data.get("address_components"),
            place_id=data.get("place_id"),
        )


class BatchGeocodeItem(BaseModel):
    """Outcome for one address of a batch request.

    Successful items carry location/formatted_address/place_id; failed
    items carry ``error`` instead.
    """
    index: int
    original_address: Any = None
    success: bool
    location: Optional[Location] = None
    formatted_address: Optional[str] = None
    place_id: Optional[str] = None
    error: Optional[str] = None


class BatchGeocodeSummary(BaseModel):
    total: int
    successful: int
    failed: int


class BatchGeocodeResponse(BaseModel):
    success: bool = True
    message: str
    results: list[BatchGeocodeItem] = Field(default_factory=list)
    summary: BatchGeocodeSummary
