"""
SpacingCard — Request Logging Middleware
==========================================

What:  One access-log line per HTTP request, tagged with the spacing
       operation that served it.
How:   Times the request around call_next; once routing has happened the
       matched route name (get_spacing, patch_spacing, ...) and the
       component_id path parameter are read back from the ASGI scope.
When:  Runs inside RequestIDMiddleware so the request ID is available.

Example line:
    PATCH /spacing/4f1c… 200 3.2ms op=patch_spacing component=4f1c… [a1b2c3d4]

5xx → ERROR, 4xx → WARNING, everything else → INFO.
Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from spacingcard.middleware.request_id import request_id_var

logger = logging.getLogger("spacingcard.access")

# Probes run every few seconds
SKIPPED_PATHS = frozenset({"/health"})


def _status_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _operation(request: Request) -> str:
    """Name of the route handler that served the request, or "-" when unrouted."""
    route = request.scope.get("route")
    return getattr(route, "name", None) or "-"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log keyed by spacing operation and component."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        operation = _operation(request)
        component_id = request.path_params.get("component_id", "-")
        rid = request_id_var.get("")

        logger.log(
            _status_level(response.status_code),
            "%s %s %d %.1fms op=%s component=%s [%s]",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            operation,
            component_id,
            rid,
            extra={
                "request_id": rid,
                "operation": operation,
                "component_id": component_id,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
