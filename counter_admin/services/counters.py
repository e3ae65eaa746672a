"""Service functions for reading and resetting counters.

Counters are the metrics whose name starts with the configured prefix.  The
prefix is stripped before a counter is shown to callers and added back when a
caller names a counter, so the store's naming convention never leaks into the
API.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from .. import schemas
from ..audit import log_action
from ..config import settings
from ..errors import NotFound
from ..paging import Page, PageRequest, page_window, validate
from ..repository import Metric, MetricRepository

logger = logging.getLogger(__name__)


def is_counter(name: str, prefix: str | None = None) -> bool:
    """Return True when a raw metric name denotes a counter."""
    return name.startswith(settings.counter_prefix if prefix is None else prefix)


def as_counter(metric: Metric, prefix: str | None = None) -> Metric:
    """Strip the counter prefix from a metric known to be a counter."""
    prefix = settings.counter_prefix if prefix is None else prefix
    return Metric(metric.name[len(prefix):], metric.value)


def filter_counters(metrics: Iterable[Metric], prefix: str | None = None) -> list[Metric]:
    return [as_counter(m, prefix) for m in metrics if is_counter(m.name, prefix)]


def rank_counters(counters: Iterable[Metric]) -> list[Metric]:
    # sorted() is stable with reverse=True, so ties keep enumeration order
    return sorted(counters, key=lambda c: c.value, reverse=True)


def to_metric_resource(counter: Metric) -> schemas.MetricResource:
    return schemas.MetricResource(name=counter.name)


def to_counter_resource(counter: Metric) -> schemas.CounterResource:
    return schemas.CounterResource(name=counter.name, value=int(counter.value))


def list_counters(
    repo: MetricRepository,
    pageable: Optional[PageRequest] = None,
    detailed: bool = False,
) -> schemas.CounterPage:
    """Return one page of counters ordered by value, largest first."""
    validate(pageable)
    counters = rank_counters(filter_counters(repo.find_all()))
    page: Page[Metric] = page_window(pageable, counters)
    assemble = to_counter_resource if detailed else to_metric_resource
    return schemas.CounterPage(
        content=[assemble(c) for c in page.items],
        page=schemas.PageMetadataRead(
            size=page.metadata.size,
            number=page.metadata.number,
            total_elements=page.metadata.total_elements,
        ),
    )


def find_counter(repo: MetricRepository, name: str) -> Metric:
    """Look up a counter by its display name.

    Raises:
        NotFound: if the store has no metric named ``prefix + name``.
    """
    metric = repo.find_one(settings.counter_prefix + name)
    if metric is None:
        raise NotFound(name)
    return metric


def display_counter(repo: MetricRepository, name: str) -> schemas.CounterResource:
    return to_counter_resource(as_counter(find_counter(repo, name)))


def delete_counter(repo: MetricRepository, name: str) -> None:
    metric = find_counter(repo, name)
    repo.reset(metric.name)
    logger.info("Reset counter %s", metric.name)
    log_action("reset", counter=metric.name, value=metric.value)
