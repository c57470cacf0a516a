"""Pytest configuration and fixtures."""

from collections.abc import AsyncIterator, Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from resource_service.db.migrations import apply_migrations
from resource_service.db.turso import TursoClient
from resource_service.main import app
from resource_service.repositories.resource_repo import ResourceRepository


class TickingClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
async def db_client(tmp_path: Path) -> AsyncIterator[TursoClient]:
    """Create a migrated temp file database client for testing."""
    db_path = tmp_path / "test_resources.db"
    client = TursoClient(url=f"file:{db_path}")
    await client.connect()
    await apply_migrations(client)
    yield client
    await client.close()


@pytest.fixture
def repo(db_client: TursoClient, clock: Callable[[], datetime]) -> ResourceRepository:
    """ResourceRepository over the temp database with a deterministic clock."""
    return ResourceRepository(db_client, clock=clock)


@pytest.fixture
async def client(
    db_client: TursoClient, repo: ResourceRepository
) -> AsyncIterator[AsyncClient]:
    """Create async test client for FastAPI app with database."""
    app.state.db = db_client
    app.state.resource_repo = repo

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    del app.state.db
    del app.state.resource_repo
