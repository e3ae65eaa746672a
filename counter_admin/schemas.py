"""
Pydantic schemas for response bodies.

Field names here are the external contract of the counters API: a deep
counter is ``{name, value}``, a shallow one is ``{name}``, and listings are
wrapped in ``{content, page: {size, number, totalElements}}``.
"""
from __future__ import annotations

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field


class MetricResource(BaseModel):
    """Shallow view of a counter, exposing only its name."""

    name: str


class CounterResource(MetricResource):
    """Deep view of a counter: name and current value."""

    value: int


class PageMetadataRead(BaseModel):
    size: int
    number: int
    total_elements: int = Field(alias="totalElements")

    model_config = ConfigDict(populate_by_name=True)


class CounterPage(BaseModel):
    # Deep resources first so that detailed listings keep their value field
    content: List[Union[CounterResource, MetricResource]]
    page: PageMetadataRead
