"""Exceptions raised by the counter services.

`create_app` maps these onto HTTP responses; the services themselves stay
free of FastAPI types so they can be called from scripts and tests.
"""
from __future__ import annotations


class CounterAdminError(Exception):
    """Base class for errors surfaced to API callers."""


class NotFound(CounterAdminError, LookupError):
    """The requested counter does not exist in the metric store."""

    def __init__(self, name: str):
        super().__init__(f"No counter named '{name}'")
        self.name = name


class InvalidArgument(CounterAdminError, ValueError):
    """A paging request was malformed."""
