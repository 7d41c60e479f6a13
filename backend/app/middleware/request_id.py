"""
Inventory API: Request ID Middleware
======================================

What:  Gives each request a short correlation ID and returns it in the
       X-Request-ID response header.
How:   Stores the ID in a ContextVar, so loggers and exception handlers read
       it without it being passed around, and on request.state for handlers.
Who:   Applied to every request; the outermost of the app's own middleware.

A client may send its own X-Request-ID (e.g. a frontend tying a UI action
to its API call). It is accepted only if it is short and made of safe
characters, since it ends up in log lines and response headers.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Use the client's X-Request-ID if it passes the format check
        2. Otherwise generate an 8-character hex ID
        3. Expose it via request_id_var and request.state.request_id
        4. Echo it in the response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get(REQUEST_ID_HEADER, "")
        rid = supplied if _VALID_REQUEST_ID.match(supplied) else new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
