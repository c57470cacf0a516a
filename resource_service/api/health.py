"""Liveness and readiness checks."""

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from resource_service.config import settings
from resource_service.db.migrations import SCHEMA_VERSION, current_version

router = APIRouter(prefix="/health", tags=["health"])


class HealthStatus(BaseModel):
    """Health outcome, with per-dependency results for readiness."""

    status: str
    version: str = settings.app_version
    checks: dict[str, str] = Field(default_factory=dict)


@router.get("/live", response_model=HealthStatus)
async def liveness() -> HealthStatus:
    return HealthStatus(status="alive")


@router.get("/ready", response_model=HealthStatus)
async def readiness(request: Request) -> HealthStatus:
    """Ready once the database answers and the schema is current."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        return HealthStatus(status="not_ready", checks={"database": "not_configured"})

    checks = {"database": "failed", "schema": "unknown"}
    if await db.is_healthy():
        checks["database"] = "ok"
        version = await current_version(db)
        checks["schema"] = "ok" if version >= SCHEMA_VERSION else f"at {version}"

    ready = all(v == "ok" for v in checks.values())
    return HealthStatus(status="ready" if ready else "not_ready", checks=checks)
