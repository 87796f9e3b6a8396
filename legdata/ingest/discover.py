"""Daybreak file discovery."""

import logging
from collections.abc import Iterator
from pathlib import Path

from legdata.app.ports import StoragePort
from legdata.model.daybreak import ClassificationError, DaybreakFile, NotFoundError

logger = logging.getLogger(__name__)


def discover_daybreak_files(
    root: Path,
    storage_port: StoragePort,
    *,
    recursive: bool = False,
) -> Iterator[DaybreakFile]:
    """Discover daybreak files under ``root``.

    Files whose names match no daybreak doc type are skipped with a warning.
    Records are yielded in sorted path order.

    Args:
        root: Directory to scan, or a single daybreak file
        storage_port: Port used to list the directory
        recursive: Search subdirectories (default: False)

    Yields:
        DaybreakFile records

    Raises:
        FileNotFoundError: If root path does not exist
        ClassificationError: If ``root`` is a single unclassifiable file
    """
    if not root.exists():
        raise FileNotFoundError(f"Path not found: {root}")

    if root.is_file():
        yield DaybreakFile(root)
        return

    for file_path in storage_port.list_files(root, recursive=recursive):
        try:
            yield DaybreakFile(file_path)
        except ClassificationError as exc:
            logger.warning("Skipping %s: %s", file_path, exc)
        except NotFoundError:
            # Removed between listing and construction.
            logger.warning("Skipping %s: file disappeared during discovery", file_path)
