"""Calendar data port for spot-check reference and observed sources."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from legdata.model.calendar import Calendar, CalendarId


class CalendarDataPort(Protocol):
    """Port interface for read access to a calendar data source."""

    def get_calendars_by_range(self, start: datetime, end: datetime) -> list[Calendar]:
        """Return calendars whose calendar date falls within ``start``..``end`` inclusive."""
        ...

    def get_calendar(self, calendar_id: CalendarId) -> Calendar | None:
        """Return the calendar with ``calendar_id`` or ``None`` when absent."""
        ...
