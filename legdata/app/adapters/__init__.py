"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .calendar import JsonlCalendarDataAdapter
from .storage import FileSystemStorageAdapter

__all__ = [
    "FileSystemStorageAdapter",
    "JsonlCalendarDataAdapter",
]
