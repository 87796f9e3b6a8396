"""Daybreak file discovery."""

from legdata.ingest.discover import discover_daybreak_files

__all__ = ["discover_daybreak_files"]
