"""
Healthcheck endpoints.

`/api/health` returns 200 OK if the app is up.
`/api/ready` checks that the metric store answers a listing.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ..deps import get_metric_repository
from ..repository import MetricRepository

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health():
    """Liveness probe."""
    return {"status": "ok"}


@router.get("/ready")
def ready(repo: MetricRepository = Depends(get_metric_repository)):
    """Readiness probe; checks metric store connectivity."""
    try:
        repo.find_all()
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Metric store unavailable: {exc}",
        )
    return {"status": "ready"}
