"""Resource CRUD endpoints.

Thin adapter over ResourceRepository: parses requests, maps absence to
404 and rejected input to 400.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from resource_service.models.resource import Resource, ResourcePage
from resource_service.repositories.resource_repo import ResourceRepository
from resource_service.resources.normalizer import InvalidResourceInput

router = APIRouter(prefix="/resources", tags=["resources"])

NOT_FOUND = "Not found"


def get_resource_repo(request: Request) -> ResourceRepository:
    """Get ResourceRepository from app state."""
    if not hasattr(request.app.state, "resource_repo"):
        raise HTTPException(status_code=500, detail="ResourceRepository not initialized")
    return request.app.state.resource_repo


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": NOT_FOUND})


@router.post(
    "",
    response_model=Resource,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing or blank name"}},
)
async def create_resource(
    payload: Any = Body(default=None),
    repo: ResourceRepository = Depends(get_resource_repo),
) -> Resource | JSONResponse:
    """Create a resource from ``{name, details?}``."""
    try:
        return await repo.create(payload)
    except InvalidResourceInput as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})


@router.get("", response_model=ResourcePage)
async def list_resources(
    q: str | None = None,
    limit: str | None = None,
    offset: str | None = None,
    repo: ResourceRepository = Depends(get_resource_repo),
) -> ResourcePage:
    """List resources with optional search and pagination.

    ``limit`` and ``offset`` are taken as raw text so malformed values
    fall back to defaults rather than failing validation.
    """
    return await repo.list(q=q, limit=limit, offset=offset)


@router.get("/{resource_id}", response_model=Resource, responses={404: {"description": NOT_FOUND}})
async def get_resource(
    resource_id: str,
    repo: ResourceRepository = Depends(get_resource_repo),
) -> Resource | JSONResponse:
    """Get a single resource."""
    found = await repo.get(resource_id)
    if found is None:
        return _not_found()
    return found


@router.put("/{resource_id}", response_model=Resource, responses={404: {"description": NOT_FOUND}})
async def update_resource(
    resource_id: str,
    payload: Any = Body(default=None),
    repo: ResourceRepository = Depends(get_resource_repo),
) -> Resource | JSONResponse:
    """Partially update a resource with ``{name?, details?}``."""
    updated = await repo.update(resource_id, payload)
    if updated is None:
        return _not_found()
    return updated


@router.delete("/{resource_id}", response_model=Resource, responses={404: {"description": NOT_FOUND}})
async def delete_resource(
    resource_id: str,
    repo: ResourceRepository = Depends(get_resource_repo),
) -> Resource | JSONResponse:
    """Delete a resource and return it as it was before removal."""
    deleted = await repo.delete(resource_id)
    if deleted is None:
        return _not_found()
    return deleted
