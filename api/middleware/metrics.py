"""Prometheus metrics middleware for request monitoring.

Tracks:
- request_count: Counter by method, path, status
- request_latency: Histogram by method, path
- active_requests: Gauge of currently processing requests
"""

import time
from typing import Callable

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "path"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
)

AUTH_FAILURES = Counter(
    "auth_failures_total",
    "Requests rejected by the access gate or login",
    ["status"],
)

# Route label for requests that matched nothing; keeps label cardinality bounded
UNMATCHED_PATH = "<unmatched>"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for HTTP requests.

    Tracks request counts, latency histograms, and active request gauge.
    Metrics are exposed via the /metrics endpoint.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        method = request.method

        ACTIVE_REQUESTS.inc()
        start_time = time.time()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration = time.time() - start_time
            ACTIVE_REQUESTS.dec()

            # Routing has run by now, so the matched route is in the scope
            path = self._get_path_template(request)
            if path != "/metrics":
                REQUEST_COUNT.labels(
                    method=method,
                    path=path,
                    status=str(status_code),
                ).inc()

                REQUEST_LATENCY.labels(
                    method=method,
                    path=path,
                ).observe(duration)

                if status_code in (401, 403):
                    AUTH_FAILURES.labels(status=str(status_code)).inc()

        return response

    def _get_path_template(self, request: Request) -> str:
        """Get the route pattern instead of actual path.

        This normalizes paths like /api/users/123/status to
        /api/users/{user_id}/status to prevent high cardinality in metrics
        labels.
        """
        route_path = getattr(request.scope.get("route"), "path", None)
        if route_path:
            return route_path

        for route in request.app.routes:
            route_path = getattr(route, "path", None)
            if route_path is None:
                continue
            match, _ = route.matches(request.scope)
            if match == Match.FULL:
                return route_path

        return UNMATCHED_PATH


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get the content type for Prometheus metrics."""
    return CONTENT_TYPE_LATEST
