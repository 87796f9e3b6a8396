"""Configuration management with Pydantic and XDG data directory support."""

import os
import sys
from datetime import timedelta
from pathlib import Path

from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_xdg_data_home() -> Path:
    """Get XDG_DATA_HOME directory, defaulting to ~/.local/share."""
    xdg_data = os.getenv("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


class Settings(BaseSettings):
    """legdata configuration settings.

    Precedence: CLI flag > environment variable > config file > defaults.

    Instances stay mutable after load so processing flags can be flipped while
    the application is running; the environment is only read at construction.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEGDATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Data directory
    data_dir: Path | None = Field(
        default=None,
        description="Override data directory (defaults to XDG_DATA_HOME/legdata)",
    )

    # File system layout
    staging_dir: Path | None = Field(
        default=None,
        description="Directory holding incoming data files (defaults to <data_dir>/staging)",
    )

    archive_dir: Path | None = Field(
        default=None,
        description="Directory holding processed data files (defaults to <data_dir>/archive)",
    )

    # Processing settings
    processing_enabled: bool = Field(
        default=True,
        description="Enable processing (staging and archival) of data files",
    )

    process_logging_enabled: bool = Field(
        default=True,
        description="Log lifecycle events while processing data files",
    )

    # Spotcheck settings
    spotcheck_alert_grace_period_minutes: int = Field(
        default=60,
        ge=0,
        description="Minutes a published reference is given before mismatches are reported",
    )

    prod_calendar_path: Path | None = Field(
        default=None,
        description="JSONL dump of production calendars (defaults to <data_dir>/prod-calendars.jsonl)",
    )

    calendar_store_path: Path | None = Field(
        default=None,
        description="JSONL store of locally processed calendars (defaults to <data_dir>/calendars.jsonl)",
    )

    _resolved_data_dir: Path | None = PrivateAttr(default=None)
    _data_dir_warning_emitted: bool = PrivateAttr(default=False)

    def get_data_dir(self) -> Path:
        """Get the data directory, creating if necessary."""
        if self.data_dir:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            return self.data_dir

        if self._resolved_data_dir is not None:
            return self._resolved_data_dir

        primary_dir = get_xdg_data_home() / "legdata"
        try:
            primary_dir.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = primary_dir
            return primary_dir
        except PermissionError as exc:
            fallback = Path.cwd() / ".legdata-data"
            fallback.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = fallback
            if not self._data_dir_warning_emitted:
                print(
                    f"Warning: cannot create data directory at {primary_dir} ({exc}). "
                    f"Using local '{fallback}' instead. Pass --data-dir to override.",
                    file=sys.stderr,
                )
                self._data_dir_warning_emitted = True
            return fallback

    def get_staging_dir(self) -> Path:
        """Get the staging directory, creating if necessary."""
        staging_dir = self.staging_dir or self.get_data_dir() / "staging"
        staging_dir.mkdir(parents=True, exist_ok=True)
        return staging_dir

    def get_archive_dir(self) -> Path:
        """Get the archive directory, creating if necessary."""
        archive_dir = self.archive_dir or self.get_data_dir() / "archive"
        archive_dir.mkdir(parents=True, exist_ok=True)
        return archive_dir

    def get_daybreak_staging_dir(self) -> Path:
        """Get the directory where incoming daybreak files are staged."""
        staging_dir = self.get_staging_dir() / "daybreak"
        staging_dir.mkdir(parents=True, exist_ok=True)
        return staging_dir

    def get_daybreak_archive_dir(self) -> Path:
        """Get the directory where processed daybreak files are archived."""
        archive_dir = self.get_archive_dir() / "daybreak"
        archive_dir.mkdir(parents=True, exist_ok=True)
        return archive_dir

    def get_daybreak_manifest_path(self) -> Path:
        """Get path to the daybreak lifecycle manifest."""
        return self.get_data_dir() / "daybreak-manifest.jsonl"

    def get_spotcheck_alert_grace_period(self) -> timedelta:
        """Return the spotcheck alert grace period as a duration."""
        return timedelta(minutes=self.spotcheck_alert_grace_period_minutes)

    def get_prod_calendar_path(self) -> Path:
        """Get path to the production calendar reference dump."""
        if self.prod_calendar_path is not None:
            return self.prod_calendar_path
        return self.get_data_dir() / "prod-calendars.jsonl"

    def get_calendar_store_path(self) -> Path:
        """Get path to the local calendar store."""
        if self.calendar_store_path is not None:
            return self.calendar_store_path
        return self.get_data_dir() / "calendars.jsonl"


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
