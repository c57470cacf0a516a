"""Mapping from stored rows to the external Resource shape."""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from resource_service.models.resource import Resource, ResourceRow
from resource_service.resources.identifiers import encode_id

ROW_FIELDS = ("id", "name", "details", "created_at", "updated_at")


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision.

    Naive datetimes are taken to be UTC. Output looks like
    ``2024-05-01T12:00:00.000Z``.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> datetime:
    """Parse a stored timestamp into an aware UTC datetime.

    Accepts datetimes and ISO-8601 text, including SQLite's
    ``YYYY-MM-DD HH:MM:SS`` form and a trailing ``Z``.

    Raises:
        ValueError: If the value is not a recognizable timestamp
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value)
    else:
        raise ValueError(f"Unsupported timestamp value: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def row_to_record(row: Sequence[Any]) -> ResourceRow:
    """Convert a positional row (``ROW_FIELDS`` order) into a ResourceRow.

    Raises:
        ValueError: If the row has the wrong width or unusable values
    """
    if len(row) != len(ROW_FIELDS):
        raise ValueError(
            f"Expected {len(ROW_FIELDS)} columns for a resource row, got {len(row)}"
        )
    key, name, details, created_at, updated_at = (row[i] for i in range(len(row)))
    return ResourceRow(
        id=key,
        name=name,
        details=details if details is not None else "",
        created_at=parse_timestamp(created_at),
        updated_at=parse_timestamp(updated_at),
    )


def to_resource(record: ResourceRow) -> Resource:
    """Map a stored record to its external representation."""
    return Resource(
        id=encode_id(record.id),
        name=record.name,
        details=record.details,
        created_at=format_timestamp(record.created_at),
        updated_at=format_timestamp(record.updated_at),
    )
