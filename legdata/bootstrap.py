"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from dataclasses import dataclass

from legdata.app import DaybreakStagingService, ProdCalendarReportService
from legdata.app.adapters import FileSystemStorageAdapter, JsonlCalendarDataAdapter
from legdata.app.ports import CalendarDataPort, StoragePort
from legdata.config import Settings, get_settings


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    storage_port: StoragePort
    calendar_port: CalendarDataPort
    prod_calendar_port: CalendarDataPort
    staging_service: DaybreakStagingService
    prod_calendar_report_service: ProdCalendarReportService


def bootstrap_application(settings: Settings | None = None) -> ApplicationContainer:
    """Instantiate adapters and services for CLI consumption."""

    active_settings = settings or get_settings()

    storage = FileSystemStorageAdapter()
    calendar_port = JsonlCalendarDataAdapter(active_settings.get_calendar_store_path(), storage)
    prod_calendar_port = JsonlCalendarDataAdapter(
        active_settings.get_prod_calendar_path(), storage
    )

    staging_service = DaybreakStagingService(settings=active_settings, storage_port=storage)
    prod_calendar_report_service = ProdCalendarReportService(
        settings=active_settings,
        observed_port=calendar_port,
        prod_data_port=prod_calendar_port,
    )

    return ApplicationContainer(
        settings=active_settings,
        storage_port=storage,
        calendar_port=calendar_port,
        prod_calendar_port=prod_calendar_port,
        staging_service=staging_service,
        prod_calendar_report_service=prod_calendar_report_service,
    )
