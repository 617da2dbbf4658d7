"""Gateway error types and the failure envelope they render to."""
from typing import Optional

from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    """Failure response body. Never carries results/result payloads."""
    success: bool = False
    message: str
    error: Optional[str] = None


class GatewayError(Exception):
    """Base error raised by gateway handlers and converted at the route boundary."""

    status_code: int = 500
    outcome: str = "unexpected_error"

    def __init__(self, message: str, error: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.error = error
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(message=self.message, error=self.error)


class ValidationError(GatewayError):
    """Missing or malformed input, detected before any outbound call."""
    status_code = 400
    outcome = "validation_error"


class ConfigurationError(GatewayError):
    """Server-side configuration is incomplete (e.g. no API key)."""
    status_code = 500
    outcome = "configuration_error"


class UpstreamError(GatewayError):
    """The provider answered with a non-success status code."""
    status_code = 400
    outcome = "upstream_error"

    def __init__(
        self,
        message: str,
        upstream_status: str,
        error: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.upstream_status = upstream_status
        super().__init__(message, error=error, status_code=status_code)


class MethodNotAllowedError(GatewayError):
    """The gateway is read-only; mutation methods are rejected."""
    status_code = 405
    outcome = "method_not_allowed"


class UnexpectedError(GatewayError):
    """Any other failure: transport, parsing, or an unforeseen exception."""
    status_code = 500
    outcome = "unexpected_error"
