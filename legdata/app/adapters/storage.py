"""Filesystem-backed storage port implementation."""

from __future__ import annotations

import json
import shutil
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from legdata.app.ports import StoragePort


class FileSystemStorageAdapter(StoragePort):
    """Adapter that performs direct filesystem operations."""

    def read_jsonl(self, path: Path) -> Iterator[dict[str, Any]]:
        with Path(path).open("r", encoding="utf-8") as handle:
            for line in handle:
                line = line.strip()
                if not line:
                    continue
                yield json.loads(line)

    def list_files(
        self, directory: Path, pattern: str = "*", *, recursive: bool = False
    ) -> Iterator[Path]:
        root = Path(directory)
        if not root.is_dir():
            return iter(())
        matches = root.rglob(pattern) if recursive else root.glob(pattern)
        return iter(
            sorted(path for path in matches if path.is_file() and not path.is_symlink())
        )

    def move_file(self, src: Path, dst: Path) -> Path:
        destination = Path(dst)
        destination.parent.mkdir(parents=True, exist_ok=True)
        return Path(shutil.move(str(src), str(destination)))
