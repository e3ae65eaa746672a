"""Metric store adapters.

Provides a minimal interface with implementations backed by process memory
and by a SQL table.  The counters service only needs `find_all`, `find_one`
and `reset`; `set` and `increment` exist so the request-metrics middleware and
the seeding script have something to write with.

Reset removes the metric entirely, so a reset counter disappears from
listings until it is incremented again.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol

from sqlalchemy.orm import Session

from . import models


@dataclass(frozen=True)
class Metric:
    """Immutable snapshot of a named metric value."""

    name: str
    value: float


class MetricRepository(Protocol):
    """Simple protocol for metric store backends."""

    def find_all(self) -> Iterable[Metric]:
        ...

    def find_one(self, name: str) -> Optional[Metric]:
        ...

    def reset(self, name: str) -> None:
        ...

    def set(self, metric: Metric) -> None:
        ...

    def increment(self, name: str, delta: float = 1.0) -> None:
        ...


class InMemoryMetricRepository:
    """Keep metrics in a dict guarded by a lock."""

    def __init__(self, metrics: Iterable[Metric] = ()):
        self._lock = threading.Lock()
        # dicts keep insertion order, which fixes the enumeration order
        self._metrics: dict[str, float] = {m.name: m.value for m in metrics}

    def find_all(self) -> list[Metric]:
        with self._lock:
            return [Metric(name, value) for name, value in self._metrics.items()]

    def find_one(self, name: str) -> Optional[Metric]:
        with self._lock:
            if name not in self._metrics:
                return None
            return Metric(name, self._metrics[name])

    def reset(self, name: str) -> None:
        with self._lock:
            self._metrics.pop(name, None)

    def set(self, metric: Metric) -> None:
        with self._lock:
            self._metrics[metric.name] = metric.value

    def increment(self, name: str, delta: float = 1.0) -> None:
        with self._lock:
            self._metrics[name] = self._metrics.get(name, 0.0) + delta


class SqlMetricRepository:
    """Metric store persisted in the ``metrics`` table.

    Each call opens its own session so that a single operation is atomic from
    the caller's point of view.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def find_all(self) -> list[Metric]:
        db = self.session_factory()
        try:
            rows = db.query(models.MetricRecord).order_by(models.MetricRecord.name).all()
            return [Metric(r.name, float(r.value)) for r in rows]
        finally:
            db.close()

    def find_one(self, name: str) -> Optional[Metric]:
        db = self.session_factory()
        try:
            row = db.get(models.MetricRecord, name)
            if row is None:
                return None
            return Metric(row.name, float(row.value))
        finally:
            db.close()

    def reset(self, name: str) -> None:
        db = self.session_factory()
        try:
            db.query(models.MetricRecord).filter(models.MetricRecord.name == name).delete()
            db.commit()
        finally:
            db.close()

    def set(self, metric: Metric) -> None:
        db = self.session_factory()
        try:
            row = db.get(models.MetricRecord, metric.name)
            if row is None:
                db.add(models.MetricRecord(name=metric.name, value=metric.value))
            else:
                row.value = metric.value
            db.commit()
        finally:
            db.close()

    def increment(self, name: str, delta: float = 1.0) -> None:
        db = self.session_factory()
        try:
            row = db.get(models.MetricRecord, name)
            if row is None:
                db.add(models.MetricRecord(name=name, value=delta))
            else:
                row.value = row.value + delta
            db.commit()
        finally:
            db.close()
