"""Daybreak staging service.

Moves incoming daybreak files into the staging area, archives them once
processed, and keeps their lifecycle state in a JSONL manifest so partially
processed batches can be resumed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from legdata.app.ports import StoragePort
from legdata.config import Settings
from legdata.model.daybreak import (
    ClassificationError,
    DaybreakFile,
    DaybreakManifestEntry,
    NotFoundError,
)
from legdata.utils.jsonl import atomic_write_jsonl
from legdata.utils.schema import strip_schema_metadata

logger = logging.getLogger(__name__)

MANIFEST_SCHEMA_ID = "daybreak_manifest"
MANIFEST_SCHEMA_VERSION = 1
UNDATED_ARCHIVE_DIR = "undated"


def _manifest_key(record: DaybreakFile) -> str:
    return str(record.file_path.resolve())


class DaybreakStagingService:
    """Stage and archive daybreak files.

    All file moves go through the storage port. The manifest is rewritten
    atomically after every stage or archive operation.
    """

    def __init__(self, settings: Settings, storage_port: StoragePort) -> None:
        """Initialize staging service.

        Args:
            settings: Application settings providing staging/archive locations
            storage_port: Filesystem operations port
        """
        self.settings = settings
        self.storage = storage_port

    def _log(self, message: str, *args: object) -> None:
        if self.settings.process_logging_enabled:
            logger.info(message, *args)

    # ------------------------------------------------------------------#
    # Manifest
    # ------------------------------------------------------------------#

    def _read_manifest(self) -> dict[str, DaybreakFile]:
        manifest_path = self.settings.get_daybreak_manifest_path()
        if not manifest_path.exists():
            return {}

        records: dict[str, DaybreakFile] = {}
        for raw in self.storage.read_jsonl(manifest_path):
            entry = DaybreakManifestEntry.model_validate(strip_schema_metadata(raw))
            try:
                record = DaybreakFile.from_manifest_entry(entry)
            except (NotFoundError, ClassificationError) as exc:
                logger.warning("Dropping manifest entry %s: %s", entry.path, exc)
                continue
            records[_manifest_key(record)] = record
        return records

    def _write_manifest(self, records: dict[str, DaybreakFile]) -> None:
        atomic_write_jsonl(
            self.settings.get_daybreak_manifest_path(),
            (record.to_manifest_entry() for record in records.values()),
            schema_id=MANIFEST_SCHEMA_ID,
            schema_version=MANIFEST_SCHEMA_VERSION,
        )

    def load_manifest(self) -> list[DaybreakFile]:
        """Rehydrate every daybreak file recorded in the manifest.

        Entries whose file no longer exists are skipped with a warning.
        """
        return list(self._read_manifest().values())

    def pending(self) -> list[DaybreakFile]:
        """Return staged daybreak files that have not been archived."""
        return [record for record in self.load_manifest() if not record.archived]

    # ------------------------------------------------------------------#
    # Lifecycle
    # ------------------------------------------------------------------#

    def _archive_destination(self, record: DaybreakFile) -> Path:
        year_dir = (
            str(record.report_date.year) if record.report_date is not None else UNDATED_ARCHIVE_DIR
        )
        return self.settings.get_daybreak_archive_dir() / year_dir / record.file_name

    def stage(self, source: Path) -> list[DaybreakFile]:
        """Move daybreak files from ``source`` into the staging directory.

        Files already sitting in the staging directory are registered in
        place. Files that are not daybreak files, or whose name is already
        staged or archived, are left where they are. The manifest records
        every file moved before a failure.

        Args:
            source: Directory holding incoming daybreak files

        Returns:
            Newly staged records

        Raises:
            RuntimeError: If processing is disabled
            FileNotFoundError: If ``source`` does not exist
            NotADirectoryError: If ``source`` is not a directory
        """
        if not self.settings.processing_enabled:
            raise RuntimeError(
                "Processing is disabled. Set LEGDATA_PROCESSING_ENABLED=true to stage files."
            )
        if not source.exists():
            raise FileNotFoundError(f"Path not found: {source}")
        if not source.is_dir():
            raise NotADirectoryError(f"Not a directory: {source}")

        staging_dir = self.settings.get_daybreak_staging_dir()
        manifest = self._read_manifest()
        staged_at = datetime.now()
        staged: list[DaybreakFile] = []

        try:
            for file_path in self.storage.list_files(source):
                try:
                    record = DaybreakFile(file_path, staged_at=staged_at)
                except (ClassificationError, NotFoundError) as exc:
                    logger.warning("Skipping %s: %s", file_path, exc)
                    continue

                destination = staging_dir / record.file_name
                in_place = destination.resolve() == file_path.resolve()
                if in_place and _manifest_key(record) in manifest:
                    continue
                if not in_place and destination.exists():
                    logger.warning("Skipping %s: %s is already staged", file_path, destination)
                    continue
                archived_copy = self._archive_destination(record)
                if archived_copy.exists():
                    logger.warning("Skipping %s: %s is already archived", file_path, archived_copy)
                    continue

                if not in_place:
                    record.file_path = self.storage.move_file(file_path, destination)
                manifest[_manifest_key(record)] = record
                staged.append(record)
                self._log("Staged daybreak file %s", record)
        finally:
            if staged:
                self._write_manifest(manifest)
        return staged

    def _archive_into(self, record: DaybreakFile, manifest: dict[str, DaybreakFile]) -> None:
        if record.archived:
            raise ValueError(f"Daybreak file is already archived: {record!r}")

        destination = self._archive_destination(record)
        if destination.exists():
            raise FileExistsError(f"Archive already contains {destination}")

        staged_key = _manifest_key(record)
        record.file_path = self.storage.move_file(record.file_path, destination)
        record.archived = True
        manifest.pop(staged_key, None)
        manifest[_manifest_key(record)] = record
        self._log("Archived daybreak file %s", record)

    def archive(self, record: DaybreakFile) -> DaybreakFile:
        """Move ``record`` into the archive and mark it archived.

        Files are archived under ``<archive>/<report year>/``; undated files
        go to ``<archive>/undated/``.

        Raises:
            ValueError: If the record is already archived
            FileExistsError: If the archive already holds a file of that name
        """
        manifest = self._read_manifest()
        self._archive_into(record, manifest)
        self._write_manifest(manifest)
        return record

    def archive_pending(self) -> list[DaybreakFile]:
        """Archive every staged daybreak file that has not been archived.

        Stops at the first failure; files archived before it stay recorded
        as archived in the manifest.
        """
        manifest = self._read_manifest()
        pending = [record for record in manifest.values() if not record.archived]
        archived: list[DaybreakFile] = []
        try:
            for record in pending:
                self._archive_into(record, manifest)
                archived.append(record)
        finally:
            if archived:
                self._write_manifest(manifest)
        return archived
