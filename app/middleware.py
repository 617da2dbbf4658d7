"""FastAPI middleware for Prometheus metrics instrumentation."""
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.metrics import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION_SECONDS,
    HTTP_REQUESTS_IN_PROGRESS,
    HTTP_REQUEST_SIZE_BYTES,
    HTTP_RESPONSE_SIZE_BYTES,
)

# Segments after these prefixes are always identifiers
ID_PARENT_SEGMENTS = {"details"}


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP request metrics for Prometheus."""

    # Endpoints to exclude from metrics (like /metrics itself)
    EXCLUDE_PATHS = {"/metrics", "/health"}

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and collect metrics."""
        path = request.url.path
        method = request.method

        if path in self.EXCLUDE_PATHS:
            return await call_next(request)

        endpoint = normalize_endpoint(path)

        content_length = request.headers.get("content-length")
        if content_length:
            try:
                HTTP_REQUEST_SIZE_BYTES.labels(
                    method=method, endpoint=endpoint
                ).observe(int(content_length))
            except ValueError:
                pass

        HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=endpoint).inc()
        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration = time.perf_counter() - start_time
            HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method, endpoint=endpoint
            ).observe(duration)
            HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=endpoint).dec()
            HTTP_REQUESTS_TOTAL.labels(
                method=method, endpoint=endpoint, status_code=str(status_code)
            ).inc()

        response_size = response.headers.get("content-length")
        if response_size:
            try:
                HTTP_RESPONSE_SIZE_BYTES.labels(
                    method=method, endpoint=endpoint
                ).observe(int(response_size))
            except ValueError:
                pass

        return response


def normalize_endpoint(path: str) -> str:
    """Normalize URL path to avoid high cardinality from path parameters.

    Converts paths like /places/details/ChIJN1t_tDeuEmsRUsoyG83frY4 to
    /places/details/{id}
    """
    segments = [s for s in path.strip("/").split("/") if s]

    normalized = []
    for i, segment in enumerate(segments):
        if (i > 0 and segments[i - 1] in ID_PARENT_SEGMENTS) or is_id_segment(segment):
            normalized.append("{id}")
        else:
            normalized.append(segment)

    return "/" + "/".join(normalized)


def is_id_segment(segment: str) -> bool:
    """Check if a path segment looks like an ID."""
    # Google place IDs and other long tokens
    if len(segment) >= 20 and segment.replace("-", "").replace("_", "").isalnum():
        return True
    if segment.isdigit() and len(segment) >= 5:
        return True
    return False
