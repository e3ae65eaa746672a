"""
Middleware for assigning correlation IDs to incoming requests.

Each request gets a fresh UUID stored in a context variable so that audit
entries written while handling it can be tied back to the request.  The ID is
returned to clients in the `X-Request-ID` response header.
"""
from __future__ import annotations

import uuid
import contextvars
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that sets a unique request ID for each request."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_ctx.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers.setdefault("X-Request-ID", rid)
        return response
