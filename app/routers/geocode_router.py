"""FastAPI routes for the geocode endpoints."""
import json
import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from app.handlers import GeocodeHandler
from app.models.errors import GatewayError, MethodNotAllowedError, UnexpectedError
from app.routers.responses import envelope_response, error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["geocode"])

# Global handler reference - set during startup
_geocode_handler: Optional[GeocodeHandler] = None


def set_geocode_handler(handler: Optional[GeocodeHandler]):
    """Set the geocode handler instance (called during startup)."""
    global _geocode_handler
    _geocode_handler = handler
    logger.info("[GeocodeRouter] Handler injected successfully")


def get_handler() -> GeocodeHandler:
    """Get the geocode handler, raising error if not initialized."""
    if _geocode_handler is None:
        raise GatewayError("Service not ready", status_code=503)
    return _geocode_handler


@router.get(
    "/geocode",
    summary="Geocode address",
    description="Resolve a free-text address to coordinates",
)
async def geocode_address(
    address: Optional[str] = Query(None, description="Address to geocode"),
) -> JSONResponse:
    try:
        handler = get_handler()
        return envelope_response(await handler.geocode(address))
    except GatewayError as e:
        return error_response(e)


@router.post(
    "/geocode",
    summary="Batch geocode",
    description="Resolve up to 10 addresses from a JSON body {\"addresses\": [...]}",
)
async def batch_geocode(request: Request) -> JSONResponse:
    try:
        handler = get_handler()
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"[GeocodeRouter] Invalid JSON body for batch geocoding: {e}")
            raise UnexpectedError("Server error during batch geocoding", error=str(e))

        addresses = body.get("addresses") if isinstance(body, dict) else None
        return envelope_response(await handler.batch_geocode(addresses))
    except GatewayError as e:
        return error_response(e)


@router.put("/geocode", summary="Not supported")
async def update_geocode() -> JSONResponse:
    return error_response(MethodNotAllowedError("PUT method not supported for geocode API"))


@router.delete("/geocode", summary="Not supported")
async def delete_geocode() -> JSONResponse:
    return error_response(MethodNotAllowedError("DELETE method not supported for geocode API"))
