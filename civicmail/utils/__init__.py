"""Utility helpers for reusable functionality."""

from .datetime import (
    from_storage,
    get_app_timezone,
    now_in_app_timezone,
    storage_now,
    to_storage,
)

__all__ = [
    "from_storage",
    "get_app_timezone",
    "now_in_app_timezone",
    "storage_now",
    "to_storage",
]
