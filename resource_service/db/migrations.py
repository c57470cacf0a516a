"""Versioned schema initialization.

Migrations are applied in order and recorded in ``schema_migrations``.
Each migration runs in its own batch together with its bookkeeping
insert, so a version is either fully applied or not recorded at all.
Running ``apply_migrations`` against an up-to-date database is a no-op.
"""

import logging

from resource_service.db.turso import TursoClient

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, list[str]]] = [
    (
        1,
        [
            """
            CREATE TABLE IF NOT EXISTS resources (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL CHECK (length(trim(name)) > 0),
                details TEXT NOT NULL DEFAULT '',
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """,
        ],
    ),
]

SCHEMA_VERSION = MIGRATIONS[-1][0]


async def current_version(db: TursoClient) -> int:
    """Return the highest applied migration version (0 for a fresh database)."""
    await db.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version INTEGER PRIMARY KEY,
            applied_at TEXT NOT NULL
        )
    """)
    result = await db.execute("SELECT MAX(version) FROM schema_migrations")
    if not result.rows or result.rows[0][0] is None:
        return 0
    return int(result.rows[0][0])


async def apply_migrations(db: TursoClient) -> int:
    """Bring the schema up to ``SCHEMA_VERSION``.

    Args:
        db: Connected database client

    Returns:
        Number of migrations applied by this call
    """
    version = await current_version(db)
    applied = 0
    for target, statements in MIGRATIONS:
        if target <= version:
            continue
        await db.execute_batch(
            [
                *statements,
                (
                    "INSERT INTO schema_migrations (version, applied_at) "
                    "VALUES (?, strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))",
                    [target],
                ),
            ]
        )
        applied += 1
        logger.info(f"Applied schema migration {target}")

    if applied == 0:
        logger.debug(f"Schema up to date at version {version}")
    return applied
