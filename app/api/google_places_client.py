"""Google Places web service client (legacy JSON endpoints) with async HTTP support."""
import logging
import time
from typing import Any, Optional

import httpx

from app.metrics import (
    GOOGLE_PLACES_API_CALLS_TOTAL,
    GOOGLE_PLACES_API_CALL_DURATION_SECONDS,
    GOOGLE_PLACES_API_ERRORS_TOTAL,
    GOOGLE_PLACES_UPSTREAM_STATUS_TOTAL,
)

logger = logging.getLogger(__name__)

GOOGLE_MAPS_API_BASE = "https://maps.googleapis.com/maps/api"

# Field set requested from the Place Details endpoint
# See: https://developers.google.com/maps/documentation/places/web-service/details
DETAILS_FIELDS = ",".join([
    "name",
    "formatted_address",
    "formatted_phone_number",
    "geometry",
    "types",
    "address_components",
    "website",
    "opening_hours",
    "rating",
    "user_ratings_total",
    "reviews",
    "photos",
])


class GooglePlacesAPIClient:
    """Async HTTP client for the Google Places and Geocoding web services.

    Every call returns the decoded JSON body untouched. Provider status
    codes (``OK``, ``ZERO_RESULTS``, ``REQUEST_DENIED`` ...) arrive inside the
    body and are interpreted by the handlers; only transport failures and
    non-2xx HTTP responses raise here.

    The API key is sent as the ``key`` query parameter and is never logged.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = GOOGLE_MAPS_API_BASE,
        timeout: float = 10.0,
        max_connections: int = 20,
    ):
        """Initialize Google Places API client.

        Args:
            api_key: Google Maps Platform API key (may be empty; see is_configured)
            base_url: Base URL for the Maps web services
            timeout: Request timeout in seconds
            max_connections: Connection pool size
        """
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        # Create async HTTP client with connection pooling
        self.client = httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(
                max_keepalive_connections=max(1, max_connections // 2),
                max_connections=max_connections,
            ),
        )

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available for outbound calls."""
        return bool(self._api_key)

    async def close(self):
        """Close the HTTP client and clean up resources."""
        await self.client.aclose()

    def redact(self, text: str) -> str:
        """Strip the API key from text that may embed a request URL."""
        if not self._api_key:
            return text
        return text.replace(self._api_key, "[REDACTED]")

    async def _get(self, endpoint: str, path: str, params: dict[str, Any]) -> dict:
        """Perform a GET against a Maps web service endpoint.

        Args:
            endpoint: Metric label for the call (e.g. "text_search")
            path: Path below the base URL (e.g. "/place/textsearch/json")
            params: Query parameters, without the API key

        Returns:
            Decoded JSON body

        Raises:
            httpx.HTTPStatusError: If response status is not 2xx
            httpx.TimeoutException: If the call exceeds the configured timeout
            httpx.RequestError: If the request fails
        """
        url = f"{self.base_url}{path}"
        query = {k: v for k, v in params.items() if v is not None}

        logger.debug(f"[GooglePlacesAPIClient] GET {path} params={query}")

        start_time = time.perf_counter()

        try:
            response = await self.client.get(url, params={**query, "key": self._api_key})

            logger.debug(f"[GooglePlacesAPIClient] Response status: {response.status_code}")

            response.raise_for_status()
            data = response.json()

            duration = time.perf_counter() - start_time
            GOOGLE_PLACES_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
            GOOGLE_PLACES_API_CALLS_TOTAL.labels(endpoint=endpoint, status="success").inc()
            GOOGLE_PLACES_UPSTREAM_STATUS_TOTAL.labels(
                endpoint=endpoint, upstream_status=str(data.get("status"))
            ).inc()

            return data

        except httpx.HTTPStatusError as e:
            duration = time.perf_counter() - start_time
            GOOGLE_PLACES_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
            GOOGLE_PLACES_API_CALLS_TOTAL.labels(endpoint=endpoint, status="error").inc()
            GOOGLE_PLACES_API_ERRORS_TOTAL.labels(endpoint=endpoint, error_type="http_error").inc()
            logger.error(
                f"[GooglePlacesAPIClient] HTTP {e.response.status_code} on {path}"
            )
            raise
        except httpx.TimeoutException:
            duration = time.perf_counter() - start_time
            GOOGLE_PLACES_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
            GOOGLE_PLACES_API_CALLS_TOTAL.labels(endpoint=endpoint, status="error").inc()
            GOOGLE_PLACES_API_ERRORS_TOTAL.labels(endpoint=endpoint, error_type="timeout").inc()
            logger.error(f"[GooglePlacesAPIClient] Timeout after {self.timeout}s on {path}")
            raise
        except httpx.RequestError as e:
            duration = time.perf_counter() - start_time
            GOOGLE_PLACES_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
            GOOGLE_PLACES_API_CALLS_TOTAL.labels(endpoint=endpoint, status="error").inc()
            GOOGLE_PLACES_API_ERRORS_TOTAL.labels(endpoint=endpoint, error_type="connection_error").inc()
            logger.error(
                f"[GooglePlacesAPIClient] Request error on {path}: {self.redact(str(e))}"
            )
            raise

    async def text_search(
        self,
        query: str,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        radius: Optional[float] = None,
        place_type: Optional[str] = None,
        page_token: Optional[str] = None,
    ) -> dict:
        """Call the Text Search endpoint.

        Location bias is only applied when both ``lat`` and ``lng`` are given.
        """
        params: dict[str, Any] = {"query": query}
        if lat is not None and lng is not None:
            params["location"] = f"{lat},{lng}"
            params["radius"] = _format_number(radius)
        params["type"] = place_type
        params["pagetoken"] = page_token

        return await self._get("text_search", "/place/textsearch/json", params)

    async def place_details(self, place_id: str, fields: str = DETAILS_FIELDS) -> dict:
        """Call the Place Details endpoint for ``place_id``."""
        params = {"place_id": place_id, "fields": fields}
        return await self._get("place_details", "/place/details/json", params)

    async def nearby_search(
        self,
        lat: float,
        lng: float,
        radius: float,
        place_type: Optional[str] = None,
        keyword: Optional[str] = None,
        page_token: Optional[str] = None,
    ) -> dict:
        """Call the Nearby Search endpoint."""
        params = {
            "location": f"{lat},{lng}",
            "radius": _format_number(radius),
            "type": place_type,
            "keyword": keyword,
            "pagetoken": page_token,
        }
        return await self._get("nearby_search", "/place/nearbysearch/json", params)

    async def geocode(self, address: str) -> dict:
        """Call the Geocoding endpoint for a free-text address."""
        return await self._get("geocode", "/geocode/json", {"address": address})


def _format_number(value: Optional[float]) -> Optional[str]:
    """Render 1500.0 as "1500" and 12.5 as "12.5"."""
    if value is None:
        return None
    if float(value).is_integer():
        return str(int(value))
    return str(value)
