"""JSON envelope helpers shared by the gateway routers."""
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.models.errors import GatewayError


def envelope_response(model: BaseModel, status_code: int = 200) -> JSONResponse:
    """Render a success envelope."""
    return JSONResponse(status_code=status_code, content=model.model_dump(mode="json"))


def error_response(error: GatewayError) -> JSONResponse:
    """Render a failure envelope; ``error`` is omitted when there is no detail."""
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_envelope().model_dump(mode="json", exclude_none=True),
    )
