"""JSONL-backed calendar data source."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from legdata.app.ports import CalendarDataPort, StoragePort
from legdata.model.calendar import Calendar, CalendarId
from legdata.utils.schema import strip_schema_metadata

logger = logging.getLogger(__name__)


class JsonlCalendarDataAdapter(CalendarDataPort):
    """Serve calendars from a JSONL file, one calendar per line.

    The file is read on every call; a missing file is an empty source.
    """

    def __init__(self, path: Path, storage_port: StoragePort) -> None:
        self.path = path
        self.storage = storage_port

    def _load(self) -> list[Calendar]:
        if not self.path.exists():
            logger.warning("Calendar source %s does not exist", self.path)
            return []
        return [
            Calendar.model_validate(strip_schema_metadata(record))
            for record in self.storage.read_jsonl(self.path)
        ]

    def get_calendars_by_range(self, start: datetime, end: datetime) -> list[Calendar]:
        first, last = start.date(), end.date()
        calendars = [cal for cal in self._load() if first <= cal.cal_date <= last]
        return sorted(calendars, key=lambda cal: (cal.cal_date, cal.calendar_id.number))

    def get_calendar(self, calendar_id: CalendarId) -> Calendar | None:
        for calendar in self._load():
            if calendar.calendar_id == calendar_id:
                return calendar
        return None
