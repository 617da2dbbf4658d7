"""Geocode handler: single and batch address lookup over the Geocoding API."""
import asyncio
import logging
from typing import Any, Optional

from app.api.google_places_client import GooglePlacesAPIClient
from app.handlers.base_handler import GatewayHandler, is_blank
from app.metrics import BATCH_GEOCODE_ITEMS_TOTAL
from app.models.errors import UpstreamError, ValidationError
from app.models.geocode import (
    BatchGeocodeItem,
    BatchGeocodeResponse,
    BatchGeocodeSummary,
    GeocodeResponse,
)
from app.models.place import Location

logger = logging.getLogger(__name__)

DEFAULT_BATCH_LIMIT = 10


class GeocodeHandler(GatewayHandler):
    """Handler for address geocoding requests."""

    def __init__(self, places_client: GooglePlacesAPIClient, batch_limit: int = DEFAULT_BATCH_LIMIT):
        super().__init__(places_client)
        self.batch_limit = batch_limit

    async def geocode(self, address: Optional[str]) -> GeocodeResponse:
        """Geocode one address; the first match wins.

        A non-OK status, or OK with no results, is reported as 404.
        """
        try:
            if is_blank(address):
                raise ValidationError("Address parameter is required")

            self._require_credential()

            logger.info(f"[GeocodeHandler] Geocoding address: {address}")

            data = await self.places_client.geocode(address)
            first = self._first_result(data)
            response = GeocodeResponse.from_google(first)
        except Exception as e:
            raise self._fail("geocode", "Server error while geocoding address", e) from e

        self._record("geocode", "success")
        return response

    async def batch_geocode(self, addresses: Any) -> BatchGeocodeResponse:
        """Geocode up to ``batch_limit`` addresses concurrently.

        Per-address failures are reported in the matching item and never
        fail the batch. Items keep input order.
        """
        try:
            if not isinstance(addresses, list):
                raise ValidationError("Addresses array is required")
            if len(addresses) > self.batch_limit:
                raise ValidationError(
                    f"Maximum {self.batch_limit} addresses allowed per batch request"
                )

            self._require_credential()

            logger.info(f"[GeocodeHandler] Batch geocoding {len(addresses)} addresses")

            results = await asyncio.gather(
                *(self._geocode_item(index, address) for index, address in enumerate(addresses))
            )
        except Exception as e:
            raise self._fail("batch_geocode", "Server error during batch geocoding", e) from e

        successful = sum(1 for r in results if r.success)
        failed = len(results) - successful
        BATCH_GEOCODE_ITEMS_TOTAL.labels(result="success").inc(successful)
        BATCH_GEOCODE_ITEMS_TOTAL.labels(result="failure").inc(failed)
        self._record("batch_geocode", "success")

        return BatchGeocodeResponse(
            message=f"Batch geocoding completed: {successful} successful, {failed} failed",
            results=list(results),
            summary=BatchGeocodeSummary(total=len(results), successful=successful, failed=failed),
        )

    async def _geocode_item(self, index: int, address: Any) -> BatchGeocodeItem:
        if is_blank(address) or not isinstance(address, str):
            return BatchGeocodeItem(
                index=index,
                original_address=address,
                success=False,
                error="Address must be a non-empty string",
            )

        try:
            data = await self.places_client.geocode(address)

            results = data.get("results") or []
            if data.get("status") != "OK" or not results:
                return BatchGeocodeItem(
                    index=index,
                    original_address=address,
                    success=False,
                    error=f"Geocoding failed: {data.get('status')}",
                )

            first = results[0]
            return BatchGeocodeItem(
                index=index,
                original_address=address,
                success=True,
                location=Location.from_geometry(first.get("geometry")),
                formatted_address=first.get("formatted_address"),
                place_id=first.get("place_id"),
            )
        except Exception as e:
            detail = self.places_client.redact(str(e)) or type(e).__name__
            logger.warning(f"[GeocodeHandler] Batch item {index} failed: {detail}")
            return BatchGeocodeItem(
                index=index,
                original_address=address,
                success=False,
                error=detail,
            )

    def _first_result(self, data: dict) -> dict:
        results = data.get("results") or []
        status = data.get("status")
        if status == "OK" and results:
            return results[0]

        logger.warning(f"[GeocodeHandler] Geocoding failed with status: {status}")
        raise UpstreamError(
            f"Geocoding failed: {status}",
            upstream_status=str(status),
            error=data.get("error_message") or "No results found",
            status_code=404,
        )
