"""
FastAPI dependency functions.

The metric store is attached to the application by `create_app`; handlers
receive it through `get_metric_repository` rather than importing a global.
"""
from __future__ import annotations

from fastapi import Request

from .repository import MetricRepository


def get_metric_repository(request: Request) -> MetricRepository:
    """Return the metric store bound to the running application."""
    return request.app.state.metric_repository
