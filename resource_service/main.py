"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from resource_service.api.router import api_router
from resource_service.config import settings
from resource_service.db.migrations import apply_migrations
from resource_service.db.turso import TursoClient
from resource_service.repositories.resource_repo import ResourceRepository

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Initialize database connection
    - Apply schema migrations
    - Create the resource repository

    Shutdown:
    - Close database connection
    """
    logger.info(f"Starting {settings.app_name}...")

    db = TursoClient()
    await db.connect()
    app.state.db = db

    try:
        applied = await apply_migrations(db)
    except Exception:
        logger.exception("Failed to migrate database")
        await db.close()
        raise
    logger.info(f"Database ready: {db.url} ({applied} migration(s) applied)")

    app.state.resource_repo = ResourceRepository(db)

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    await db.close()


app = FastAPI(
    title=settings.app_name,
    description="CRUD service for resources with search and pagination",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(api_router)


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    """Banner confirming the server is up."""
    return f"{settings.app_name} is running"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "resource_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_env == "development",
    )
