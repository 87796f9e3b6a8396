"""Calendar spot-check report services.

A report pulls reference calendars from an external source for a date range
and checks each one against the locally processed calendar with the same id.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from legdata.app.ports import CalendarDataPort
from legdata.config import Settings
from legdata.model.calendar import Calendar, CalendarId, to_local_naive

logger = logging.getLogger(__name__)

MismatchType = Literal["OBSERVE_DATA_MISSING", "CALENDAR_DATE", "ENTRIES"]


class CalendarMismatch(BaseModel):
    """Single discrepancy between a reference and an observed calendar."""

    calendar_id: CalendarId
    mismatch_type: MismatchType
    reference_value: str
    observed_value: str


class CalendarReport(BaseModel):
    """Outcome of a calendar spot-check run."""

    notes: str
    reference_start: datetime
    reference_end: datetime
    generated_at: datetime
    checked: list[CalendarId] = Field(default_factory=list)
    deferred: list[CalendarId] = Field(
        default_factory=list,
        description="References still inside the alert grace period",
    )
    mismatches: list[CalendarMismatch] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.mismatches


def compare_calendars(reference: Calendar, observed: Calendar | None) -> list[CalendarMismatch]:
    """Return the mismatches between ``reference`` and ``observed``."""
    calendar_id = reference.calendar_id
    if observed is None:
        return [
            CalendarMismatch(
                calendar_id=calendar_id,
                mismatch_type="OBSERVE_DATA_MISSING",
                reference_value=str(calendar_id),
                observed_value="",
            )
        ]

    mismatches = []
    if reference.cal_date != observed.cal_date:
        mismatches.append(
            CalendarMismatch(
                calendar_id=calendar_id,
                mismatch_type="CALENDAR_DATE",
                reference_value=reference.cal_date.isoformat(),
                observed_value=observed.cal_date.isoformat(),
            )
        )
    if sorted(reference.entries) != sorted(observed.entries):
        mismatches.append(
            CalendarMismatch(
                calendar_id=calendar_id,
                mismatch_type="ENTRIES",
                reference_value=", ".join(sorted(reference.entries)),
                observed_value=", ".join(sorted(observed.entries)),
            )
        )
    return mismatches


class CalendarReportService(ABC):
    """Base calendar spot-check report.

    Subclasses supply the reference source, the notes attached to each
    report, and what happens to a reference once it has been checked.
    """

    def __init__(self, settings: Settings, observed_port: CalendarDataPort) -> None:
        """Initialize report service.

        Args:
            settings: Application settings (alert grace period)
            observed_port: Locally processed calendar data
        """
        self.settings = settings
        self.observed = observed_port

    @abstractmethod
    def report_notes(self) -> str:
        """Notes attached to every report produced by this service."""

    @abstractmethod
    def get_references(self, start: datetime, end: datetime) -> list[Calendar]:
        """Return reference calendars for ``start``..``end``."""

    @abstractmethod
    def mark_as_checked(self, calendar_id: CalendarId) -> None:
        """Record that the reference for ``calendar_id`` has been checked."""

    def generate_report(
        self,
        start: datetime,
        end: datetime,
        *,
        now: datetime | None = None,
    ) -> CalendarReport:
        """Check every reference calendar in ``start``..``end``.

        References published within the alert grace period are deferred
        rather than checked.
        """
        if start > end:
            raise ValueError(f"Report start {start} is after end {end}")

        generated_at = to_local_naive(now) if now is not None else datetime.now()
        cutoff = generated_at - self.settings.get_spotcheck_alert_grace_period()
        report = CalendarReport(
            notes=self.report_notes(),
            reference_start=start,
            reference_end=end,
            generated_at=generated_at,
        )

        for reference in self.get_references(start, end):
            calendar_id = reference.calendar_id
            if reference.published_at is not None and reference.published_at > cutoff:
                report.deferred.append(calendar_id)
                continue

            observed = self.observed.get_calendar(calendar_id)
            report.mismatches.extend(compare_calendars(reference, observed))
            report.checked.append(calendar_id)
            self.mark_as_checked(calendar_id)

        logger.info(
            "Calendar report %s..%s: %d checked, %d deferred, %d mismatches",
            start,
            end,
            len(report.checked),
            len(report.deferred),
            len(report.mismatches),
        )
        return report


class ProdCalendarReportService(CalendarReportService):
    """Checks calendars against the 1.9.2 production data."""

    def __init__(
        self,
        settings: Settings,
        observed_port: CalendarDataPort,
        prod_data_port: CalendarDataPort,
    ) -> None:
        super().__init__(settings, observed_port)
        self.prod_data = prod_data_port

    def report_notes(self) -> str:
        return "1.9.2"

    def mark_as_checked(self, calendar_id: CalendarId) -> None:
        pass

    def get_references(self, start: datetime, end: datetime) -> list[Calendar]:
        return self.prod_data.get_calendars_by_range(start, end)
