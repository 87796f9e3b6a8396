"""Storage port interface for filesystem operations."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any, Protocol


class StoragePort(Protocol):
    """Port interface for storage operations.

    Abstracts filesystem I/O to enable testing and alternative backends.

    Side effects: Reads/moves files (offline).
    """

    def read_jsonl(self, path: Path) -> Iterator[dict[str, Any]]:
        """Read JSONL file line by line.

        Args:
            path: Path to JSONL file

        Yields:
            Parsed JSON objects
        """
        ...

    def list_files(
        self, directory: Path, pattern: str = "*", *, recursive: bool = False
    ) -> Iterator[Path]:
        """List files in directory, sorted by path.

        Args:
            directory: Directory path
            pattern: Glob pattern (default: all files)
            recursive: Descend into subdirectories; symlinks are not followed

        Yields:
            File paths
        """
        ...

    def move_file(self, src: Path, dst: Path) -> Path:
        """Move file, creating the destination directory.

        Args:
            src: Source path
            dst: Destination path

        Returns:
            Destination path
        """
        ...
