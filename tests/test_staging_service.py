"""Tests for daybreak staging and archival."""

import json
from datetime import date
from pathlib import Path

import pytest

from legdata.app.adapters import FileSystemStorageAdapter
from legdata.app.staging_service import DaybreakStagingService
from legdata.config import Settings
from legdata.model.daybreak import DaybreakDocType


@pytest.fixture
def service(override_settings: Settings) -> DaybreakStagingService:
    return DaybreakStagingService(
        settings=override_settings, storage_port=FileSystemStorageAdapter()
    )


def test_stage_moves_daybreak_files(
    service: DaybreakStagingService, override_settings: Settings, incoming_dir: Path
):
    staged = service.stage(incoming_dir)

    staging_dir = override_settings.get_daybreak_staging_dir()
    assert len(staged) == 4
    assert all(record.file_path.parent == staging_dir for record in staged)
    assert all(record.staged_at is not None for record in staged)
    assert all(record.archived is False for record in staged)

    # Stray files stay where they were delivered
    assert (incoming_dir / "notes.txt").exists()
    assert not (incoming_dir / "20141201.senate.low.html").exists()


def test_stage_writes_stamped_manifest(
    service: DaybreakStagingService, override_settings: Settings, incoming_dir: Path
):
    service.stage(incoming_dir)

    manifest_path = override_settings.get_daybreak_manifest_path()
    lines = manifest_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 4

    record = json.loads(lines[0])
    assert record["schema_id"] == "daybreak_manifest"
    assert record["schema_version"] == 1
    assert record["producer"].startswith("legdata-")
    assert record["archived"] is False
    assert record["doc_type"] in DaybreakDocType.__members__


def test_stage_requires_processing_enabled(
    service: DaybreakStagingService, override_settings: Settings, incoming_dir: Path
):
    override_settings.processing_enabled = False

    with pytest.raises(RuntimeError, match="Processing is disabled"):
        service.stage(incoming_dir)

    assert (incoming_dir / "20141201.senate.low.html").exists()


def test_stage_missing_source(service: DaybreakStagingService, temp_dir: Path):
    with pytest.raises(FileNotFoundError):
        service.stage(temp_dir / "missing")


def test_stage_skips_names_already_staged(
    service: DaybreakStagingService, incoming_dir: Path, temp_dir: Path
):
    service.stage(incoming_dir)

    redelivery = temp_dir / "redelivery"
    redelivery.mkdir()
    (redelivery / "20141201.senate.low.html").write_text("second delivery")

    assert service.stage(redelivery) == []
    assert (redelivery / "20141201.senate.low.html").exists()


def test_stage_registers_files_already_in_staging(
    service: DaybreakStagingService, override_settings: Settings
):
    staging_dir = override_settings.get_daybreak_staging_dir()
    (staging_dir / "20141203.page_file.txt").write_text("dropped straight into staging")

    staged = service.stage(staging_dir)

    assert [record.file_name for record in staged] == ["20141203.page_file.txt"]
    assert service.stage(staging_dir) == []
    assert len(service.pending()) == 1


def test_manifest_rehydrates_lifecycle_state(
    service: DaybreakStagingService, override_settings: Settings, incoming_dir: Path
):
    staged = {record.file_name: record for record in service.stage(incoming_dir)}

    fresh = DaybreakStagingService(
        settings=override_settings, storage_port=FileSystemStorageAdapter()
    )
    restored = {record.file_name: record for record in fresh.load_manifest()}

    assert restored.keys() == staged.keys()
    senate_low = restored["20141201.senate.low.html"]
    assert senate_low.doc_type is DaybreakDocType.SENATE_LOW
    assert senate_low.report_date == date(2014, 12, 1)
    assert senate_low.staged_at == staged["20141201.senate.low.html"].staged_at


def test_archive_moves_file_by_report_year(
    service: DaybreakStagingService, override_settings: Settings, incoming_dir: Path
):
    service.stage(incoming_dir)
    record = next(
        record for record in service.pending() if record.file_name == "20141201.senate.low.html"
    )

    archived = service.archive(record)

    archive_dir = override_settings.get_daybreak_archive_dir()
    assert archived.archived is True
    assert archived.file_path == archive_dir / "2014" / "20141201.senate.low.html"
    assert archived.file_path.exists()
    assert archived.text() == "senate low"
    assert len(service.pending()) == 3


def test_archive_rejects_archived_record(service: DaybreakStagingService, incoming_dir: Path):
    service.stage(incoming_dir)
    record = service.pending()[0]
    service.archive(record)

    with pytest.raises(ValueError, match="already archived"):
        service.archive(record)


def test_archive_pending_archives_everything(
    service: DaybreakStagingService, override_settings: Settings, incoming_dir: Path
):
    service.stage(incoming_dir)

    archived = service.archive_pending()

    archive_dir = override_settings.get_daybreak_archive_dir()
    assert len(archived) == 4
    assert (archive_dir / "undated" / "latest.senate.high.html").exists()
    assert (archive_dir / "2014" / "20141202.page_file.txt").exists()
    assert service.pending() == []
    assert all(record.archived for record in service.load_manifest())
    assert list(override_settings.get_daybreak_staging_dir().iterdir()) == []


def test_archive_refuses_to_overwrite(
    service: DaybreakStagingService, override_settings: Settings, incoming_dir: Path
):
    service.stage(incoming_dir)
    occupied = override_settings.get_daybreak_archive_dir() / "2014" / "20141201.senate.low.html"
    occupied.parent.mkdir(parents=True)
    occupied.write_text("earlier copy")
    record = next(
        record for record in service.pending() if record.file_name == "20141201.senate.low.html"
    )

    with pytest.raises(FileExistsError):
        service.archive(record)

    assert record.archived is False
    assert occupied.read_text() == "earlier copy"


def test_load_manifest_drops_vanished_files(
    service: DaybreakStagingService, override_settings: Settings, incoming_dir: Path
):
    service.stage(incoming_dir)
    (override_settings.get_daybreak_staging_dir() / "20141202.page_file.txt").unlink()

    names = {record.file_name for record in service.load_manifest()}

    assert "20141202.page_file.txt" not in names
    assert len(names) == 3


def test_stage_rejects_regular_file(service: DaybreakStagingService, senate_low_file: Path):
    with pytest.raises(NotADirectoryError):
        service.stage(senate_low_file)

    assert senate_low_file.exists()


def test_stage_skips_names_already_archived(
    service: DaybreakStagingService, incoming_dir: Path, temp_dir: Path
):
    service.stage(incoming_dir)
    service.archive_pending()

    redelivery = temp_dir / "redelivery"
    redelivery.mkdir()
    (redelivery / "20141201.senate.low.html").write_text("second delivery")

    assert service.stage(redelivery) == []
    assert (redelivery / "20141201.senate.low.html").exists()
    assert service.pending() == []


class FailingMoveStorage(FileSystemStorageAdapter):
    """Storage adapter whose moves fail after a fixed number of successes."""

    def __init__(self, successful_moves: int) -> None:
        self.remaining = successful_moves

    def move_file(self, src: Path, dst: Path) -> Path:
        if self.remaining == 0:
            raise OSError(f"Simulated move failure for {src}")
        self.remaining -= 1
        return super().move_file(src, dst)


def test_stage_records_moves_made_before_failure(
    override_settings: Settings, incoming_dir: Path
):
    service = DaybreakStagingService(
        settings=override_settings, storage_port=FailingMoveStorage(successful_moves=1)
    )

    with pytest.raises(OSError, match="Simulated move failure"):
        service.stage(incoming_dir)

    fresh = DaybreakStagingService(
        settings=override_settings, storage_port=FileSystemStorageAdapter()
    )
    recorded = fresh.load_manifest()
    assert [record.file_name for record in recorded] == ["20141201.assembly.high.html"]
    assert recorded[0].file_path.parent == override_settings.get_daybreak_staging_dir()
    assert (incoming_dir / "20141201.senate.low.html").exists()


def test_archive_pending_keeps_track_of_files_archived_before_failure(
    service: DaybreakStagingService, override_settings: Settings, incoming_dir: Path
):
    service.stage(incoming_dir)
    archive_dir = override_settings.get_daybreak_archive_dir()
    occupied = archive_dir / "2014" / "20141202.page_file.txt"
    occupied.parent.mkdir(parents=True)
    occupied.write_text("earlier copy")

    with pytest.raises(FileExistsError):
        service.archive_pending()

    fresh = DaybreakStagingService(
        settings=override_settings, storage_port=FileSystemStorageAdapter()
    )
    records = {record.file_name: record for record in fresh.load_manifest()}
    assert len(records) == 4
    assert records["20141201.assembly.high.html"].archived is True
    assert records["20141201.senate.low.html"].archived is True
    assert records["20141201.senate.low.html"].file_path == (
        archive_dir / "2014" / "20141201.senate.low.html"
    )
    assert records["20141202.page_file.txt"].archived is False
    assert records["latest.senate.high.html"].archived is False
    assert {record.file_name for record in fresh.pending()} == {
        "20141202.page_file.txt",
        "latest.senate.high.html",
    }
