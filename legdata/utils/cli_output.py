"""Schema-wrapped JSON output for CLI commands."""

from __future__ import annotations

import json
from typing import Any

from legdata.utils.schema import schema_stamp


def json_response(
    schema_id: str,
    schema_version: int,
    **data: Any,
) -> str:
    """Create schema-wrapped JSON response for CLI output.

    Args:
        schema_id: Identifier for the output type (e.g., "calendar_report").
        schema_version: Integer version for backward compatibility.
        **data: Payload data to include in the response.

    Returns:
        JSON string with schema metadata and payload.
    """
    wrapped = {**data, **schema_stamp(schema_id, schema_version)}
    return json.dumps(wrapped, indent=2, default=str)
