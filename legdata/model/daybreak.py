"""Daybreak file descriptors.

A daybreak file is a report delivered by the bill drafting commission every
morning. Each file is typed by its filename suffix and carries its report
date as a leading ``YYYYMMDD`` digit run, e.g. ``20141201.senate.low.html``.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_serializer, field_validator

logger = logging.getLogger(__name__)

REPORT_DATE_DIGITS = 8


class NotFoundError(FileNotFoundError):
    """Raised when a daybreak file does not exist on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Daybreak file not found: {path}")


class ClassificationError(ValueError):
    """Raised when a filename matches no daybreak document type."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File {path} does not match a daybreak file type")


class DaybreakReadError(RuntimeError):
    """Raised when the text of a constructed daybreak file cannot be read."""


class MissingReportDateError(ValueError):
    """Raised when a report date time is requested from an undated file."""


class DaybreakDocType(Enum):
    """Daybreak document kinds, keyed by local filename suffix.

    Declaration order is classification priority.
    """

    SENATE_LOW = ".senate.low.html"
    SENATE_HIGH = ".senate.high.html"
    ASSEMBLY_LOW = ".assembly.low.html"
    ASSEMBLY_HIGH = ".assembly.high.html"
    PAGE_FILE = ".page_file.txt"

    @property
    def local_file_ext(self) -> str:
        return self.value

    @property
    def report_date_pattern(self) -> re.Pattern[str]:
        """Pattern capturing the leading digit run before this type's suffix."""
        return re.compile(r"(\d+)" + re.escape(self.local_file_ext))

    @classmethod
    def from_file_name(cls, file_name: str) -> DaybreakDocType | None:
        """Return the first doc type whose suffix ends ``file_name``."""
        for doc_type in cls:
            if file_name.endswith(doc_type.local_file_ext):
                return doc_type
        return None


def parse_report_date(digits: str) -> date | None:
    """Strictly parse a ``YYYYMMDD`` digit run.

    Out-of-range fields are rejected instead of rolled over, so ``20140132``
    yields ``None`` rather than February 1st.
    """
    if len(digits) != REPORT_DATE_DIGITS or not digits.isdigit():
        return None
    try:
        return date(int(digits[:4]), int(digits[4:6]), int(digits[6:8]))
    except ValueError:
        return None


class DaybreakManifestEntry(BaseModel):
    """Persisted lifecycle state of a daybreak file."""

    path: str = Field(..., description="Absolute filesystem path to the daybreak file")
    doc_type: DaybreakDocType = Field(..., description="Daybreak document type")
    report_date: date | None = Field(None, description="Report date parsed from the filename")
    staged_at: datetime | None = Field(None, description="Time the file entered staging")
    archived: bool = Field(False, description="True once the file has been archived")

    @field_validator("path")
    def _validate_path(cls, value: str) -> str:
        resolved = Path(value)
        if not resolved.is_absolute():
            raise ValueError("DaybreakManifestEntry.path must be an absolute path")
        return str(resolved)

    @field_validator("doc_type", mode="before")
    def _coerce_doc_type(cls, value: object) -> object:
        if isinstance(value, str) and value in DaybreakDocType.__members__:
            return DaybreakDocType[value]
        return value

    @field_serializer("doc_type")
    def _serialize_doc_type(self, value: DaybreakDocType) -> str:
        return value.name


class DaybreakFile:
    """Reference to a local daybreak file along with its metadata.

    The document type and report date are derived from the filename at
    construction. A file whose type is known but whose date digits do not
    parse is still usable; ``report_date`` is ``None`` in that case.
    """

    def __init__(
        self,
        file_path: Path,
        staged_at: datetime | None = None,
        archived: bool = False,
    ) -> None:
        """Create a record for an existing daybreak file.

        Args:
            file_path: Path to the daybreak file
            staged_at: Time the file was staged, when rehydrating
            archived: Archived flag, when rehydrating

        Raises:
            NotFoundError: If the file does not exist
            ClassificationError: If the filename matches no doc type
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise NotFoundError(file_path.absolute())

        self.file_path = file_path
        doc_type = DaybreakDocType.from_file_name(self.file_name)
        if doc_type is None:
            raise ClassificationError(file_path)
        self._doc_type = doc_type
        self._report_date = self._report_date_from_file_name()
        self.staged_at = staged_at
        self.archived = archived

    @classmethod
    def from_manifest_entry(cls, entry: DaybreakManifestEntry) -> DaybreakFile:
        """Rehydrate a record from persisted lifecycle state.

        A persisted doc type or report date that differs from the filename
        (a manual correction) is reapplied after construction.
        """
        record = cls(Path(entry.path), staged_at=entry.staged_at, archived=entry.archived)
        if (record.doc_type, record.report_date) != (entry.doc_type, entry.report_date):
            record.reclassify(entry.doc_type, entry.report_date)
        return record

    def _report_date_from_file_name(self) -> date | None:
        match = self._doc_type.report_date_pattern.fullmatch(self.file_name)
        report_date = parse_report_date(match.group(1)) if match else None
        if report_date is None:
            logger.warning(
                "Unable to parse %s report date from file name %s",
                self._doc_type.name,
                self.file_name,
            )
        return report_date

    @property
    def file_name(self) -> str:
        return self.file_path.name

    @property
    def doc_type(self) -> DaybreakDocType:
        return self._doc_type

    @property
    def report_date(self) -> date | None:
        return self._report_date

    def reclassify(self, doc_type: DaybreakDocType, report_date: date | None) -> None:
        """Replace the doc type and report date together.

        No validation is run against the filename.
        """
        self._doc_type = doc_type
        self._report_date = report_date

    def text(self) -> str:
        """Read the full text of the daybreak file.

        Raises:
            DaybreakReadError: If the file cannot be read or decoded
        """
        try:
            return self.file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DaybreakReadError(f"Failed to read text from daybreak file: {self!r}") from exc

    def report_date_time(self) -> datetime:
        """Return the report date at the start of the day.

        Raises:
            MissingReportDateError: If the file has no report date
        """
        if self._report_date is None:
            raise MissingReportDateError(f"Daybreak file has no report date: {self!r}")
        return datetime.combine(self._report_date, datetime.min.time())

    def to_manifest_entry(self) -> DaybreakManifestEntry:
        return DaybreakManifestEntry(
            path=str(self.file_path.absolute()),
            doc_type=self._doc_type,
            report_date=self._report_date,
            staged_at=self.staged_at,
            archived=self.archived,
        )

    def __repr__(self) -> str:
        return (
            f"DaybreakFile(report_date={self._report_date}, "
            f"doc_type={self._doc_type.name}, "
            f"file_path={self.file_path}, "
            f"staged_at={self.staged_at.isoformat() if self.staged_at else None}, "
            f"archived={self.archived})"
        )
