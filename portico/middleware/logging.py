"""
Portico Backend — Request Logging Middleware
==============================================

What:  One access log line per request: method, path, status, duration,
       request id, client address and resolved language.
How:   Measures time around call_next and picks the level from the status
       class (5xx → ERROR, 4xx → WARNING, otherwise INFO).

Never logged: request bodies, Authorization headers, tokens.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from portico.middleware.request_id import request_id_var

logger = logging.getLogger("portico.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs structured information about each HTTP request and response."""

    # Probed by load balancers every few seconds
    QUIET_PATHS = {"/api/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path

        response = await call_next(request)

        if path in self.QUIET_PATHS:
            return response

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        language = request.headers.get("Accept-Language") or "-"

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s lang=%s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            language,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
