"""FastAPI routes for the places endpoints."""
import json
import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from app.handlers import PlacesHandler
from app.models.errors import GatewayError, MethodNotAllowedError, UnexpectedError
from app.routers.responses import envelope_response, error_response

logger = logging.getLogger(__name__)

# Create router at module level
router = APIRouter(tags=["places"])

# Global handler reference - set during startup
_places_handler: Optional[PlacesHandler] = None


def set_places_handler(handler: Optional[PlacesHandler]):
    """Set the places handler instance (called during startup)."""
    global _places_handler
    _places_handler = handler
    logger.info("[PlacesRouter] Handler injected successfully")


def get_handler() -> PlacesHandler:
    """Get the places handler, raising error if not initialized."""
    if _places_handler is None:
        raise GatewayError("Service not ready", status_code=503)
    return _places_handler


@router.get(
    "/places",
    summary="Search places",
    description="Text search, optionally biased to a circle around latitude/longitude",
)
async def search_places(
    query: Optional[str] = Query(None, description="Free-text search query"),
    latitude: Optional[str] = Query(None, description="Bias latitude"),
    longitude: Optional[str] = Query(None, description="Bias longitude"),
    radius: Optional[str] = Query(None, description="Bias radius in meters (default 50000)"),
    place_type: Optional[str] = Query(None, alias="type", description="Google place type filter"),
    pagetoken: Optional[str] = Query(None, description="next_page_token of a previous page"),
) -> JSONResponse:
    try:
        handler = get_handler()
        page = await handler.search(
            query,
            latitude=latitude,
            longitude=longitude,
            radius=radius,
            place_type=place_type,
            page_token=pagetoken,
        )
        return envelope_response(page)
    except GatewayError as e:
        return error_response(e)


@router.get("/places/details", include_in_schema=False)
@router.get("/places/details/", include_in_schema=False)
@router.get(
    "/places/details/{place_id}",
    summary="Place details",
    description="Fetch the full record of one place",
)
async def get_place_details(place_id: str = "") -> JSONResponse:
    try:
        handler = get_handler()
        return envelope_response(await handler.details(place_id))
    except GatewayError as e:
        return error_response(e)


@router.post(
    "/places",
    summary="Nearby search",
    description="Places around latitude/longitude from a JSON body",
)
async def search_nearby(request: Request) -> JSONResponse:
    try:
        handler = get_handler()
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"[PlacesRouter] Invalid JSON body for nearby search: {e}")
            raise UnexpectedError("Server error during nearby search", error=str(e))
        if not isinstance(body, dict):
            body = {}

        page = await handler.nearby(
            body.get("latitude"),
            body.get("longitude"),
            radius=body.get("radius"),
            place_type=body.get("type"),
            keyword=body.get("keyword"),
            page_token=body.get("pagetoken"),
        )
        return envelope_response(page)
    except GatewayError as e:
        return error_response(e)


@router.put("/places", summary="Not supported")
async def update_places() -> JSONResponse:
    return error_response(MethodNotAllowedError("PUT method not supported for places API"))


@router.delete("/places", summary="Not supported")
async def delete_places() -> JSONResponse:
    return error_response(MethodNotAllowedError("DELETE method not supported for places API"))
