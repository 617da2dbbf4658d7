"""Place data models returned by the places gateway.

Each model has a ``from_google`` constructor that projects a raw Google
Places (legacy JSON API) object down to the stable client-facing shape.
Absent collections become ``[]`` and absent ``opening_hours`` becomes
``None``; nothing is left undefined.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field


class Location(BaseModel):
    """Latitude/longitude pair."""
    lat: float
    lng: float

    @classmethod
    def from_geometry(cls, geometry: Optional[dict]) -> Optional["Location"]:
        """Build from a provider ``geometry`` object, or None if it has no location."""
        if not isinstance(geometry, dict):
            return None
        location = geometry.get("location")
        if not isinstance(location, dict):
            return None
        lat = location.get("lat")
        lng = location.get("lng")
        if lat is None or lng is None:
            return None
        return cls(lat=lat, lng=lng)


class PhotoReference(BaseModel):
    """Photo pointer for the Place Photo endpoint."""
    photo_reference: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None

    @classmethod
    def from_google(cls, data: dict) -> "PhotoReference":
        return cls(
            photo_reference=data.get("photo_reference"),
            height=data.get("height"),
            width=data.get("width"),
        )


class AttributedPhoto(PhotoReference):
    """Photo pointer plus the attributions Google requires to be displayed."""
    html_attributions: list[str] = Field(default_factory=list)

    @classmethod
    def from_google(cls, data: dict) -> "AttributedPhoto":
        return cls(
            photo_reference=data.get("photo_reference"),
            height=data.get("height"),
            width=data.get("width"),
            html_attributions=data.get("html_attributions") or [],
        )


class OpenNow(BaseModel):
    """Summary opening state."""
    open_now: Optional[bool] = None


class OpeningHours(OpenNow):
    """Full opening hours.

    ``periods`` is passed through as returned by Google
    (list of {"open": {"day", "time"}, "close": {"day", "time"}}).
    """
    periods: Optional[list[dict[str, Any]]] = None
    weekday_text: Optional[list[str]] = None


class Review(BaseModel):
    """A single user review."""
    author_name: Optional[str] = None
    author_url: Optional[str] = None
    language: Optional[str] = None
    profile_photo_url: Optional[str] = None
    rating: Optional[float] = None
    relative_time_description: Optional[str] = None
    text: Optional[str] = None
    time: Optional[int] = None

    @classmethod
    def from_google(cls, data: dict) -> "Review":
        return cls(**{name: data.get(name) for name in cls.model_fields})


class _PlaceBase(BaseModel):
    place_id: Optional[str] = None
    name: Optional[str] = None
    location: Optional[Location] = None
    types: list[str] = Field(default_factory=list)
    business_status: Optional[str] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    price_level: Optional[int] = None  # 0 (free) to 4 (very expensive)
    opening_hours: Optional[OpenNow] = None
    photos: list[PhotoReference] = Field(default_factory=list)


def _open_now(data: dict) -> Optional[OpenNow]:
    hours = data.get("opening_hours")
    if not isinstance(hours, dict):
        return None
    return OpenNow(open_now=hours.get("open_now"))


def _common_fields(data: dict) -> dict[str, Any]:
    return {
        "place_id": data.get("place_id"),
        "name": data.get("name"),
        "location": Location.from_geometry(data.get("geometry")),
        "types": data.get("types") or [],
        "business_status": data.get("business_status"),
        "rating": data.get("rating"),
        "user_ratings_total": data.get("user_ratings_total"),
        "price_level": data.get("price_level"),
        "opening_hours": _open_now(data),
        "photos": [PhotoReference.from_google(p) for p in data.get("photos") or []],
    }


class PlaceSummary(_PlaceBase):
    """A text-search result."""
    formatted_address: Optional[str] = None

    @classmethod
    def from_google(cls, data: dict) -> "PlaceSummary":
        return cls(**_common_fields(data), formatted_address=data.get("formatted_address"))


class NearbyPlaceSummary(_PlaceBase):
    """A nearby-search result; ``vicinity`` replaces ``formatted_address``."""
    vicinity: Optional[str] = None

    @classmethod
    def from_google(cls, data: dict) -> "NearbyPlaceSummary":
        return cls(**_common_fields(data), vicinity=data.get("vicinity"))


class PlaceDetail(BaseModel):
    """Full place record from the Place Details endpoint."""
    place_id: str
    name: Optional[str] = None
    formatted_address: Optional[str] = None
    formatted_phone_number: Optional[str] = None
    website: Optional[str] = None
    location: Optional[Location] = None
    types: list[str] = Field(default_factory=list)
    address_components: Optional[list[dict[str, Any]]] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    opening_hours: Optional[OpeningHours] = None
    photos: list[AttributedPhoto] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)

    @classmethod
    def from_google(cls, place_id: str, data: dict) -> "PlaceDetail":
        """Project a Place Details ``result`` object.

        ``place_id`` is the id that was requested; the details field set
        does not ask Google to echo it back.
        """
        hours = data.get("opening_hours")
        opening_hours = None
        if isinstance(hours, dict):
            opening_hours = OpeningHours(
                open_now=hours.get("open_now"),
                periods=hours.get("periods"),
                weekday_text=hours.get("weekday_text"),
            )

        return cls(
            place_id=place_id,
            name=data.get("name"),
            formatted_address=data.get("formatted_address"),
            formatted_phone_number=data.get("formatted_phone_number"),
            website=data.get("website"),
            location=Location.from_geometry(data.get("geometry")),
            types=data.get("types") or [],
            address_components=data.get("address_components"),
            rating=data.get("rating"),
            user_ratings_total=data.get("user_ratings_total"),
            opening_hours=opening_hours,
            photos=[AttributedPhoto.from_google(p) for p in data.get("photos") or []],
            reviews=[Review.from_google(r) for r in data.get("reviews") or []],
        )


# =============================================================================
# Success envelopes
# =============================================================================

class SearchResultPage(BaseModel):
    success: bool = True
    results: list[PlaceSummary] = Field(default_factory=list)
    next_page_token: Optional[str] = None
    status: str


class NearbyResultPage(BaseModel):
    success: bool = True
    results: list[NearbyPlaceSummary] = Field(default_factory=list)
    next_page_token: Optional[str] = None
    status: str


class PlaceDetailResponse(BaseModel):
    success: bool = True
    result: PlaceDetail
