"""Prometheus metrics definitions for the places gateway.

Exposes metrics for:
1. HTTP API metrics (requests, latency, errors)
2. Google Maps Platform client metrics (calls, latency, errors)
3. Gateway outcomes per operation
"""
from prometheus_client import Counter, Histogram, Gauge, Info

# =============================================================================
# HTTP API METRICS
# =============================================================================

# Request counter with method, endpoint, and status labels
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

# Request latency histogram
HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Active requests gauge
HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
)

# Request size histogram
HTTP_REQUEST_SIZE_BYTES = Histogram(
    "http_request_size_bytes",
    "HTTP request body size in bytes",
    ["method", "endpoint"],
    buckets=(100, 500, 1000, 5000, 10000, 50000, 100000),
)

# Response size histogram
HTTP_RESPONSE_SIZE_BYTES = Histogram(
    "http_response_size_bytes",
    "HTTP response body size in bytes",
    ["method", "endpoint"],
    buckets=(100, 500, 1000, 5000, 10000, 50000, 100000, 500000),
)

# =============================================================================
# GOOGLE MAPS PLATFORM CLIENT METRICS
# =============================================================================

# API call counter
GOOGLE_PLACES_API_CALLS_TOTAL = Counter(
    "google_places_api_calls_total",
    "Total number of Google Maps Platform API calls",
    ["endpoint", "status"],  # status: success, error
)

# API call latency
GOOGLE_PLACES_API_CALL_DURATION_SECONDS = Histogram(
    "google_places_api_call_duration_seconds",
    "Google Maps Platform API call latency in seconds",
    ["endpoint"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# API error counter by error type
GOOGLE_PLACES_API_ERRORS_TOTAL = Counter(
    "google_places_api_errors_total",
    "Total number of Google Maps Platform API errors",
    ["endpoint", "error_type"],  # error_type: http_error, timeout, connection_error
)

# Provider-level status codes (OK, ZERO_RESULTS, REQUEST_DENIED, ...)
GOOGLE_PLACES_UPSTREAM_STATUS_TOTAL = Counter(
    "google_places_upstream_status_total",
    "Provider status codes returned in Google Maps Platform responses",
    ["endpoint", "upstream_status"],
)

# =============================================================================
# GATEWAY OUTCOME METRICS
# =============================================================================

GATEWAY_OUTCOMES_TOTAL = Counter(
    "gateway_outcomes_total",
    "Outcome of each gateway operation",
    # outcome: success, validation_error, configuration_error,
    # upstream_error, unexpected_error
    ["operation", "outcome"],
)

BATCH_GEOCODE_ITEMS_TOTAL = Counter(
    "batch_geocode_items_total",
    "Per-address results of batch geocoding requests",
    ["result"],  # result: success, failure
)

# =============================================================================
# APPLICATION INFO
# =============================================================================

APP_INFO = Info(
    "places_gateway",
    "Places gateway application information",
)

APP_INFO.info({
    "version": "1.0.0",
    "description": "Google Places proxy and normalization service",
})
