"""API router aggregation."""

from fastapi import APIRouter

from resource_service.api.health import router as health_router
from resource_service.api.resources import router as resources_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(resources_router)
