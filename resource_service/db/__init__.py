"""Storage handle and schema initialization."""

from resource_service.db.migrations import SCHEMA_VERSION, apply_migrations
from resource_service.db.turso import TursoClient

__all__ = [
    "SCHEMA_VERSION",
    "TursoClient",
    "apply_migrations",
]
