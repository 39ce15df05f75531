"""
Request correlation middleware.

Each request gets a UUID that is bound into structlog's context variables, so
every log line emitted while handling it (including upstream Guesty calls)
carries the same ``request_id``. The ID is echoed back as ``X-Request-ID``.
"""

from __future__ import annotations

import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a unique request ID to the request state, the log context and the response.

    Example:
        >>> app.add_middleware(RequestIDMiddleware)
        >>> # GET /api/listings -> X-Request-ID: 550e8400-e29b-41d4-a716-446655440000
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id, method=request.method, path=request.url.path
        )

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
