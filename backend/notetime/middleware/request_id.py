"""
NoteTime Backend — Request ID Middleware
=========================================

What:  Assigns a short correlation id to each request and returns it in the
       X-Request-ID response header.
How:   Uses the client's X-Request-ID when sent, otherwise the first 8 hex
       characters of a UUID4. The id is stored in a ContextVar so log lines
       and error bodies produced while serving the request can include it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique id to each request for tracing.

    Behavior:
        1. Reuse the client's X-Request-ID header if present
        2. Otherwise generate a new short id
        3. Store it in the ContextVar and on request.state
        4. Echo it in the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
