"""
Page windowing over in-memory sequences.

`page_window` cuts a bounded slice out of an already sorted sequence and
describes it with `PageMetadata`.  The metadata always reflects the slice that
was actually returned: a request running past the end of the data reports the
shorter size, and a request starting past the end reports an empty page while
keeping the real total.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

from .errors import InvalidArgument

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    offset: int
    page_size: int

    @classmethod
    def of(cls, page: int, size: int) -> "PageRequest":
        """Build a request from a zero-based page number and a page size."""
        if page < 0:
            raise InvalidArgument("page must not be negative")
        check_size(size)
        return cls(offset=page * size, page_size=size)


@dataclass(frozen=True)
class PageMetadata:
    size: int
    number: int
    total_elements: int


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    metadata: PageMetadata


def check_size(size: int) -> None:
    if size <= 0:
        raise InvalidArgument("page size must be greater than zero")


def validate(request: Optional[PageRequest]) -> None:
    """Reject malformed requests; ``None`` means unpaged and is always valid."""
    if request is None:
        return
    check_size(request.page_size)
    if request.offset < 0:
        raise InvalidArgument("offset must not be negative")


def page_window(request: Optional[PageRequest], sequence: Sequence[T]) -> Page[T]:
    validate(request)
    total = len(sequence)
    if request is None:
        return Page(list(sequence), PageMetadata(size=total, number=0, total_elements=total))

    offset = request.offset
    if offset >= total:
        items: list[T] = []
    else:
        upper = min(offset + request.page_size, total)
        items = list(sequence[offset:upper])
    metadata = PageMetadata(
        size=len(items),
        number=offset // request.page_size,
        total_elements=total,
    )
    return Page(items, metadata)
