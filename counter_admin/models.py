"""
SQLAlchemy models for the SQL metric store.

A single table holds every named metric regardless of kind; counters are told
apart from other metrics by their name prefix, not by a column.
"""
from __future__ import annotations

from sqlalchemy import Column, String, Float

from .db import Base


class MetricRecord(Base):
    __tablename__ = "metrics"

    name = Column(String, primary_key=True)
    value = Column(Float, nullable=False, default=0.0)
