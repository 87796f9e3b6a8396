"""JSONL writing helpers with durability guarantees."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any, cast

from legdata.utils.schema import schema_stamp


def _normalize_record(record: Any, *, stamp: dict[str, Any] | None = None) -> str:
    """Convert supported record types into a JSON string."""
    if hasattr(record, "model_dump"):
        payload = cast(Any, record).model_dump(mode="json")
        if not isinstance(payload, dict):
            raise TypeError("Pydantic model_dump did not return a mapping.")
        typed_payload = dict(payload)
    elif isinstance(record, dict):
        typed_payload = dict(record)
    else:
        raise TypeError(
            "Unsupported record type for JSONL serialization: "
            f"{type(record)!r}. Provide dict or Pydantic model."
        )

    if stamp is not None:
        typed_payload.update(stamp)

    return json.dumps(typed_payload, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def atomic_write_jsonl(
    path: Path,
    records: Iterable[Any],
    *,
    schema_id: str | None = None,
    schema_version: int | None = None,
) -> int:
    """Write ``records`` to ``path`` atomically as JSONL.

    The write is performed via a temporary file followed by an ``os.replace``
    once the contents are flushed and fsynced, so readers never observe a
    partially written file.

    Returns:
        Number of records written
    """
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)

    if (schema_id is None) != (schema_version is None):
        raise ValueError("Both schema_id and schema_version are required when stamping records.")
    stamp = (
        schema_stamp(schema_id, schema_version)
        if schema_id is not None and schema_version is not None
        else None
    )

    fd: int | None = None
    tmp_path: str | None = None
    count = 0

    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(destination.parent),
            prefix=destination.name,
            suffix=".tmp",
            text=True,
        )

        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            fd = None  # Ownership transferred to file object
            for record in records:
                handle.write(_normalize_record(record, stamp=stamp))
                handle.write("\n")
                count += 1
            handle.flush()
            os.fsync(handle.fileno())

        os.replace(tmp_path, destination)
        tmp_path = None
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass

    return count
