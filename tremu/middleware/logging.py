"""
Tremu Backend — Request Logging Middleware
============================================

What:  One access-log line per HTTP request on the ``tremu.access`` logger.
How:   Measures wall time around the downstream app and logs method, path,
       status, duration, request ID, client IP and the authenticated user id
       (when the auth gate ran). The level follows the status class:
       5xx → ERROR, 4xx → WARNING, otherwise INFO.

Never logged: request bodies (passwords) and the Authorization header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from tremu.middleware.request_id import request_id_var

logger = logging.getLogger("tremu.access")

# Probed every few seconds by Docker / load balancers
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        # Set by the auth gate once the bearer token checks out
        user_id = getattr(request.state, "user_id", None)

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s user=%s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            user_id if user_id is not None else "-",
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "user_id": user_id,
            },
        )

        return response
