"""Shared plumbing for gateway handlers."""
import logging
import math
from typing import Any, Optional

from app.api.google_places_client import GooglePlacesAPIClient
from app.metrics import GATEWAY_OUTCOMES_TOTAL
from app.models.errors import (
    ConfigurationError,
    GatewayError,
    UnexpectedError,
    UpstreamError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = "Server configuration error: Google Maps API key is missing"


class GatewayHandler:
    """Base class: credential check, status mapping, error conversion."""

    def __init__(self, places_client: GooglePlacesAPIClient):
        """Initialize handler.

        Args:
            places_client: Provider client shared across handlers
        """
        self.places_client = places_client

    def _require_credential(self) -> None:
        if not self.places_client.is_configured:
            logger.error("Google Maps API key is not configured")
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)

    def _check_status(self, data: dict, accepted: set[str], label: str) -> str:
        """Return the provider status, or raise UpstreamError if it is not accepted."""
        status = data.get("status")
        if status not in accepted:
            logger.error(f"[{type(self).__name__}] {label} error: {status}")
            raise UpstreamError(
                f"{label} error: {status}",
                upstream_status=str(status),
                error=data.get("error_message") or "Unknown error",
            )
        return status

    def _record(self, operation: str, outcome: str) -> None:
        GATEWAY_OUTCOMES_TOTAL.labels(operation=operation, outcome=outcome).inc()

    def _fail(self, operation: str, message: str, exc: Exception) -> GatewayError:
        """Convert any exception into the GatewayError to raise for ``operation``.

        GatewayErrors pass through; everything else becomes an UnexpectedError
        carrying ``message`` and the (redacted) exception text.
        """
        if isinstance(exc, GatewayError):
            self._record(operation, exc.outcome)
            return exc

        detail = self.places_client.redact(str(exc)) or type(exc).__name__
        logger.error(f"[{type(self).__name__}] {message}: {detail}")
        self._record(operation, UnexpectedError.outcome)
        return UnexpectedError(message, error=detail)


def is_blank(value: Any) -> bool:
    """None, empty, or whitespace-only strings count as missing input."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_number(value: Any, message: str) -> float:
    """Coerce a query-string or JSON value to float, raising ValidationError."""
    # bool is an int subclass; true/false are not coordinates
    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(message)
    if not math.isfinite(number):
        raise ValidationError(message)
    return number


def optional_text(value: Any) -> Optional[str]:
    """Blank values are dropped; anything else is forwarded as a string."""
    if is_blank(value):
        return None
    return str(value)
