"""Expose routers to be imported in counter_admin.main."""
from . import (
    counters,
    health,
)  # noqa: F401
