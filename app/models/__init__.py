"""Data models package for the places gateway."""
from app.models.place import (
    Location,
    PhotoReference,
    AttributedPhoto,
    OpenNow,
    OpeningHours,
    Review,
    PlaceSummary,
    NearbyPlaceSummary,
    PlaceDetail,
    SearchResultPage,
    NearbyResultPage,
    PlaceDetailResponse,
)
from app.models.geocode import (
    GeocodeResponse,
    BatchGeocodeItem,
    BatchGeocodeSummary,
    BatchGeocodeResponse,
)
from app.models.errors import (
    ErrorEnvelope,
    GatewayError,
    ValidationError,
    ConfigurationError,
    UpstreamError,
    MethodNotAllowedError,
    UnexpectedError,
)

__all__ = [
    # Place models
    "Location",
    "PhotoReference",
    "AttributedPhoto",
    "OpenNow",
    "OpeningHours",
    "Review",
    "PlaceSummary",
    "NearbyPlaceSummary",
    "PlaceDetail",
    # Envelopes
    "SearchResultPage",
    "NearbyResultPage",
    "PlaceDetailResponse",
    # Geocode models
    "GeocodeResponse",
    "BatchGeocodeItem",
    "BatchGeocodeSummary",
    "BatchGeocodeResponse",
    # Errors
    "ErrorEnvelope",
    "GatewayError",
    "ValidationError",
    "ConfigurationError",
    "UpstreamError",
    "MethodNotAllowedError",
    "UnexpectedError",
]
