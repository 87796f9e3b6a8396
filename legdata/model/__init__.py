"""Domain models for legislative data."""

from legdata.model.calendar import Calendar, CalendarId
from legdata.model.committee import Chamber, CommitteeId
from legdata.model.daybreak import (
    ClassificationError,
    DaybreakDocType,
    DaybreakFile,
    DaybreakManifestEntry,
    DaybreakReadError,
    MissingReportDateError,
    NotFoundError,
)

__all__ = [
    "Calendar",
    "CalendarId",
    "Chamber",
    "CommitteeId",
    "ClassificationError",
    "DaybreakDocType",
    "DaybreakFile",
    "DaybreakManifestEntry",
    "DaybreakReadError",
    "MissingReportDateError",
    "NotFoundError",
]
