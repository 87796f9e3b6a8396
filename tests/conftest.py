"""Pytest configuration and fixtures."""

import gc
import json
import shutil
import tempfile
import time
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from legdata.config import Settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        # Force garbage collection to release any file handles
        gc.collect()
        # Small delay to allow OS to release file locks
        time.sleep(0.1)
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def senate_low_file(temp_dir: Path) -> Path:
    """Create a well-formed senate low daybreak file."""
    file_path = temp_dir / "20141201.senate.low.html"
    file_path.write_text("<html><body>S1234 Senate low report</body></html>", encoding="utf-8")
    return file_path


@pytest.fixture
def incoming_dir(temp_dir: Path) -> Path:
    """Create an incoming directory with a mix of daybreak and stray files."""
    incoming = temp_dir / "incoming"
    incoming.mkdir()

    (incoming / "20141201.senate.low.html").write_text("senate low", encoding="utf-8")
    (incoming / "20141201.assembly.high.html").write_text("assembly high", encoding="utf-8")
    (incoming / "20141202.page_file.txt").write_text("page file", encoding="utf-8")
    # Classifiable but undated
    (incoming / "latest.senate.high.html").write_text("senate high", encoding="utf-8")
    # Not a daybreak file
    (incoming / "notes.txt").write_text("operator notes", encoding="utf-8")

    return incoming


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated legdata settings scoped to tests."""

    import legdata.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    data_dir = temp_dir / "appdata"
    data_dir.mkdir(parents=True, exist_ok=True)

    settings = config_module.Settings(
        data_dir=data_dir,
        spotcheck_alert_grace_period_minutes=60,
    )

    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings


@pytest.fixture
def write_calendars() -> Callable[[Path, list[dict]], Path]:
    """Return a helper that writes calendar dicts as JSONL."""

    def _write(path: Path, calendars: list[dict]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            "".join(json.dumps(calendar) + "\n" for calendar in calendars),
            encoding="utf-8",
        )
        return path

    return _write
