"""Application layer for legdata.

This layer orchestrates domain logic without direct filesystem I/O.
All side effects are delegated to adapters via port interfaces.
"""

__all__ = [
    "CalendarReportService",
    "DaybreakStagingService",
    "ProdCalendarReportService",
]

from legdata.app.report_service import CalendarReportService, ProdCalendarReportService
from legdata.app.staging_service import DaybreakStagingService
