"""Schema metadata carried by persisted records and JSON output."""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from legdata import __version__

SCHEMA_METADATA_FIELDS = ("schema_id", "schema_version", "producer", "produced_at")


def schema_stamp(schema_id: str, schema_version: int) -> dict[str, Any]:
    """Return the metadata fields for one batch of ``schema_id`` records.

    A batch shares one ``produced_at`` timestamp.
    """
    return {
        "schema_id": schema_id,
        "schema_version": schema_version,
        "producer": f"legdata-{__version__}",
        "produced_at": datetime.now(UTC).isoformat(),
    }


def strip_schema_metadata(record: Mapping[str, Any]) -> dict[str, Any]:
    """Drop metadata fields so ``record`` validates against its model."""
    return {key: value for key, value in record.items() if key not in SCHEMA_METADATA_FIELDS}
