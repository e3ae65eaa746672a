"""
Middleware that counts handled requests into the metric store.

Every response increments ``counter.status.<code>.<route>`` where the route
is the matched path template with slashes turned into dots
(``/metrics/counters/{name}`` becomes ``metrics.counters.{name}`` and ``/``
becomes ``root``).  Requests that match no route all share the
``star-star`` key, so arbitrary URLs cannot grow the store.
"""
from __future__ import annotations

import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..config import settings

logger = logging.getLogger(__name__)

UNMATCHED_KEY = "star-star"


def metric_name_for(status_code: int, route_path: Optional[str], prefix: str | None = None) -> str:
    prefix = settings.counter_prefix if prefix is None else prefix
    if route_path is None:
        key = UNMATCHED_KEY
    else:
        key = route_path.strip("/").replace("/", ".") or "root"
    return f"{prefix}status.{status_code}.{key}"


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        response = await call_next(request)
        repo = getattr(request.app.state, "metric_repository", None)
        if repo is not None:
            # The router records the matched route on the shared scope
            route = request.scope.get("route")
            name = metric_name_for(response.status_code, getattr(route, "path", None))
            try:
                await run_in_threadpool(repo.increment, name)
            except Exception:
                # A store hiccup while recording must not turn a served
                # request into a failed one
                logger.exception("Failed to record request metric %s", name)
        return response
