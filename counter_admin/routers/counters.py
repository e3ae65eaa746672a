"""Counter endpoints: list, display and reset named counters."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from .. import schemas
from ..config import settings
from ..deps import get_metric_repository
from ..paging import PageRequest
from ..repository import MetricRepository
from ..services import counters as service

router = APIRouter(prefix="/metrics/counters", tags=["counters"])


def get_pageable(
    page: Optional[int] = Query(default=None, description="Zero-based page number"),
    size: Optional[int] = Query(default=None, description="Page size"),
) -> Optional[PageRequest]:
    """Build a paging request from query parameters; no parameters means unpaged."""
    if page is None and size is None:
        return None
    if size is None:
        size = settings.default_page_size
    elif size > settings.max_page_size:
        size = settings.max_page_size
    return PageRequest.of(page or 0, size)


@router.get("", response_model=schemas.CounterPage)
def list_counters(
    pageable: Optional[PageRequest] = Depends(get_pageable),
    detailed: bool = False,
    repo: MetricRepository = Depends(get_metric_repository),
):
    return service.list_counters(repo, pageable, detailed=detailed)


@router.get("/{name}", response_model=schemas.CounterResource)
def display_counter(name: str, repo: MetricRepository = Depends(get_metric_repository)):
    return service.display_counter(repo, name)


@router.delete("/{name}", status_code=status.HTTP_200_OK)
def delete_counter(name: str, repo: MetricRepository = Depends(get_metric_repository)):
    service.delete_counter(repo, name)
    return Response(status_code=status.HTTP_200_OK)
