"""Places handler: search, details and nearby over the Google Places API."""
import logging
from typing import Any, Optional

from app.handlers.base_handler import (
    GatewayHandler,
    is_blank,
    optional_text,
    parse_number,
)
from app.models.errors import ValidationError
from app.models.place import (
    NearbyPlaceSummary,
    NearbyResultPage,
    PlaceDetail,
    PlaceDetailResponse,
    PlaceSummary,
    SearchResultPage,
)

logger = logging.getLogger(__name__)

# Text search covers a whole metro area; nearby search a walkable area
DEFAULT_SEARCH_RADIUS_METERS = 50000
DEFAULT_NEARBY_RADIUS_METERS = 1500

LIST_STATUSES = {"OK", "ZERO_RESULTS"}
DETAILS_STATUSES = {"OK"}


class PlacesHandler(GatewayHandler):
    """Handler for place search, details and nearby requests.

    Every public operation either returns a success envelope or raises a
    GatewayError subclass. Input is validated and the credential checked
    before the provider is called.
    """

    async def search(
        self,
        query: Optional[str],
        latitude: Any = None,
        longitude: Any = None,
        radius: Any = None,
        place_type: Optional[str] = None,
        page_token: Optional[str] = None,
    ) -> SearchResultPage:
        """Text search, biased to a circle when both coordinates are given.

        Args:
            query: Free text, required
            latitude: Optional bias latitude (ignored unless longitude is also set)
            longitude: Optional bias longitude (ignored unless latitude is also set)
            radius: Bias radius in meters, defaults to 50000
            place_type: Google place type filter, forwarded verbatim
            page_token: next_page_token from a previous page, forwarded verbatim

        Returns:
            SearchResultPage; ZERO_RESULTS yields an empty results list
        """
        try:
            if is_blank(query):
                raise ValidationError("Query parameter is required")

            lat = lng = bias_radius = None
            if not is_blank(latitude) and not is_blank(longitude):
                lat = parse_number(latitude, "Latitude and longitude must be numbers")
                lng = parse_number(longitude, "Latitude and longitude must be numbers")
                bias_radius = (
                    DEFAULT_SEARCH_RADIUS_METERS
                    if is_blank(radius)
                    else parse_number(radius, "Radius must be a number")
                )

            self._require_credential()

            logger.info(f"[PlacesHandler] Text search: query={query!r} biased={lat is not None}")

            data = await self.places_client.text_search(
                query,
                lat=lat,
                lng=lng,
                radius=bias_radius,
                place_type=optional_text(place_type),
                page_token=optional_text(page_token),
            )
            status = self._check_status(data, LIST_STATUSES, "Places API")

            page = SearchResultPage(
                results=[PlaceSummary.from_google(p) for p in data.get("results") or []],
                next_page_token=data.get("next_page_token") or None,
                status=status,
            )
        except Exception as e:
            raise self._fail("search", "Server error during places search", e) from e

        self._record("search", "success")
        logger.info(f"[PlacesHandler] Text search returned {len(page.results)} places ({status})")
        return page

    async def details(self, place_id: Optional[str]) -> PlaceDetailResponse:
        """Fetch the fixed details field set for one place.

        Any status other than OK (ZERO_RESULTS included) is an upstream error.
        """
        try:
            if is_blank(place_id):
                raise ValidationError("Place ID parameter is required")

            self._require_credential()

            logger.info(f"[PlacesHandler] Getting details for place ID: {place_id}")

            data = await self.places_client.place_details(place_id)
            self._check_status(data, DETAILS_STATUSES, "Place Details API")

            response = PlaceDetailResponse(
                result=PlaceDetail.from_google(place_id, data.get("result") or {})
            )
        except Exception as e:
            raise self._fail("details", "Server error getting place details", e) from e

        self._record("details", "success")
        return response

    async def nearby(
        self,
        latitude: Any,
        longitude: Any,
        radius: Any = None,
        place_type: Optional[str] = None,
        keyword: Optional[str] = None,
        page_token: Optional[str] = None,
    ) -> NearbyResultPage:
        """Nearby search around a required point, radius defaults to 1500 m."""
        try:
            if is_blank(latitude) or is_blank(longitude):
                raise ValidationError("Latitude and longitude are required")

            lat = parse_number(latitude, "Latitude and longitude must be numbers")
            lng = parse_number(longitude, "Latitude and longitude must be numbers")
            search_radius = (
                DEFAULT_NEARBY_RADIUS_METERS
                if is_blank(radius)
                else parse_number(radius, "Radius must be a number")
            )

            self._require_credential()

            logger.info(
                f"[PlacesHandler] Nearby search near: {lat:.6f},{lng:.6f} radius={search_radius}m"
            )

            data = await self.places_client.nearby_search(
                lat,
                lng,
                search_radius,
                place_type=optional_text(place_type),
                keyword=optional_text(keyword),
                page_token=optional_text(page_token),
            )
            status = self._check_status(data, LIST_STATUSES, "Nearby Search API")

            page = NearbyResultPage(
                results=[NearbyPlaceSummary.from_google(p) for p in data.get("results") or []],
                next_page_token=data.get("next_page_token") or None,
                status=status,
            )
        except Exception as e:
            raise self._fail("nearby", "Server error during nearby search", e) from e

        self._record("nearby", "success")
        logger.info(f"[PlacesHandler] Nearby search returned {len(page.results)} places ({status})")
        return page
