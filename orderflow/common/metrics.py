"""Prometheus metric definitions for the status service and update client."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


unknown_status_total = Counter(
    "order_unknown_status_total",
    "Status values outside the registry seen by callers",
    ["service", "source"],
)
unknown_role_total = Counter(
    "order_unknown_role_total",
    "Role values outside the visibility table seen by callers",
    ["service"],
)
status_update_requests_total = Counter(
    "order_status_update_requests_total",
    "Order status updates sent to the orders API",
    ["service", "status"],
)
status_update_rejected_total = Counter(
    "order_status_update_rejected_total",
    "Order status updates rejected locally or by the orders API",
    ["service", "reason"],
)
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
