"""
Inventory API: Request Logging Middleware
===========================================

What:  One access log line per HTTP request, with status and duration.
How:   Times the downstream call and logs on the "inventory.access" logger.
       The level follows the status: 5xx ERROR, 4xx WARNING, else INFO.
Who:   Applied to every request, inside RequestIDMiddleware so the line
       carries the request ID.

Example line:
    2024-06-10T09:12:44 [INFO] inventory.access: POST /api/produk 201 38.2ms [1f0c9a2b] user=3 from 127.0.0.1

What we log vs what we DON'T log:
    Logged:     method, path, status, duration, client IP, request ID, id_user
    Not logged: request bodies (passwords, photos), Authorization headers
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("inventory.access")

# Not access-logged
QUIET_PATHS = frozenset({"/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        # Set by the auth dependency on protected routes
        user = getattr(request.state, "user", None)
        id_user = user.id_user if user is not None else None

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            id_user if id_user is not None else "-",
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "id_user": id_user,
            },
        )
        return response
