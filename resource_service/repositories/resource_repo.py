"""Repository for the resources table.

Sole reader and writer of ``resources``. Missing records are reported
as None; storage errors propagate unchanged to the caller.
"""

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import structlog

from resource_service.db.turso import TursoClient
from resource_service.models.resource import Resource, ResourcePage, ResourceRow
from resource_service.resources.identifiers import decode_id
from resource_service.resources.mapper import (
    format_timestamp,
    parse_timestamp,
    row_to_record,
    to_resource,
)
from resource_service.resources.normalizer import normalize_create, normalize_update
from resource_service.resources.query import build_query

logger = structlog.get_logger()

_SELECT_BY_ID = """
    SELECT id, name, details, created_at, updated_at
    FROM resources
    WHERE id = ?
"""


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ResourceRepository:
    """Create, read, list, update and delete resources.

    The schema must already be in place (see ``db.migrations``).
    """

    def __init__(
        self,
        db_client: TursoClient,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
            clock: Source of the current time for timestamps
        """
        self._db = db_client
        self._clock = clock

    async def _fetch(self, key: int) -> ResourceRow | None:
        result = await self._db.execute(_SELECT_BY_ID, [key])
        if not result.rows:
            return None
        return row_to_record(result.rows[0])

    async def create(self, data: Any) -> Resource:
        """Insert a new resource.

        Args:
            data: ResourceCreate or mapping with ``name`` and optional ``details``

        Returns:
            The stored resource, with equal created/updated timestamps

        Raises:
            InvalidResourceInput: If the name is missing or blank
        """
        payload = normalize_create(data)
        now = format_timestamp(self._clock())
        result = await self._db.execute(
            """
            INSERT INTO resources (name, details, created_at, updated_at)
            VALUES (?, ?, ?, ?)
            """,
            [payload.name, payload.details, now, now],
        )
        key = result.last_insert_rowid
        record = await self._fetch(key)
        if record is None:
            msg = f"Inserted resource {key} could not be read back"
            raise RuntimeError(msg)

        logger.info("resource created", resource_id=key)
        return to_resource(record)

    async def get(self, resource_id: str) -> Resource | None:
        """Get a resource by external id.

        Returns:
            The resource, or None if the id is malformed or unknown
        """
        key = decode_id(resource_id)
        if key is None:
            return None
        record = await self._fetch(key)
        if record is None:
            logger.debug("resource not found", resource_id=resource_id)
            return None
        return to_resource(record)

    async def list(
        self,
        q: Any = None,
        limit: Any = None,
        offset: Any = None,
    ) -> ResourcePage:
        """List resources matching an optional search term, oldest first.

        Malformed ``limit``/``offset`` fall back to defaults instead of
        failing. ``total`` counts every match regardless of the window.

        Args:
            q: Case-insensitive substring matched against name and details
            limit: Page size, clamped to [1, 100], default 20
            offset: Records to skip, at least 0, default 0

        Returns:
            ResourcePage with total, applied window and items
        """
        query = build_query(q, limit, offset)
        count_result, page_result = await asyncio.gather(
            self._db.execute(query.count_sql, query.params),
            self._db.execute(query.page_sql, query.page_params),
        )
        total = count_result.rows[0][0] if count_result.rows else 0
        items = [to_resource(row_to_record(row)) for row in page_result.rows]

        logger.debug(
            "resources listed",
            total=total,
            returned=len(items),
            limit=query.window.limit,
            offset=query.window.offset,
        )
        return ResourcePage(
            total=total or 0,
            limit=query.window.limit,
            offset=query.window.offset,
            items=items,
        )

    async def update(self, resource_id: str, data: Any) -> Resource | None:
        """Apply a partial update.

        Only supplied fields change; a blank name is ignored. The update
        timestamp is refreshed even when no field content changes.

        Returns:
            The updated resource, or None if it does not exist
        """
        key = decode_id(resource_id)
        if key is None:
            return None
        existing = await self._fetch(key)
        if existing is None:
            return None

        changes = normalize_update(data)
        updated_at = max(parse_timestamp(self._clock()), existing.created_at)
        record = existing.model_copy(
            update={
                **changes.model_dump(exclude_none=True),
                "updated_at": updated_at,
            }
        )
        result = await self._db.execute(
            """
            UPDATE resources
            SET name = ?, details = ?, updated_at = ?
            WHERE id = ?
            """,
            [record.name, record.details, format_timestamp(updated_at), key],
        )
        if result.rows_affected == 0:
            # Deleted between the read and the write
            return None

        if changes.is_empty():
            logger.info("resource touched", resource_id=key)
        else:
            logger.info(
                "resource updated",
                resource_id=key,
                fields=sorted(changes.model_dump(exclude_none=True)),
            )
        return to_resource(record)

    async def delete(self, resource_id: str) -> Resource | None:
        """Permanently delete a resource.

        Returns:
            The resource as it was just before removal, or None if it
            does not exist (including when already deleted)
        """
        key = decode_id(resource_id)
        if key is None:
            return None
        existing = await self._fetch(key)
        if existing is None:
            return None

        result = await self._db.execute("DELETE FROM resources WHERE id = ?", [key])
        if result.rows_affected == 0:
            return None

        logger.info("resource deleted", resource_id=key)
        return to_resource(existing)
