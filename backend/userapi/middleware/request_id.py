"""
User API — Request ID Middleware
=================================

What:  Assigns a correlation ID to each request and echoes it in the response.
How:   Takes the client's X-Request-ID header if present, otherwise a short
       random one; stores it in a ContextVar and on request.state.
When:  Outermost application middleware, so every log line of the request
       (access log, service logs, error handlers) can read it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the context, request.state and response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars is plenty for correlating log lines
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        # Left set after the response; the 500 handler reads it from outside.
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
