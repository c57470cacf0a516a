"""Input normalization for create and partial update."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from resource_service.models.resource import ResourceCreate, ResourceUpdate


class InvalidResourceInput(ValueError):
    """Raised when create input lacks a usable name."""


def _as_mapping(payload: Any) -> Mapping[str, Any]:
    if payload is None:
        return {}
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=True)
    if isinstance(payload, Mapping):
        return payload
    raise InvalidResourceInput("request body must be an object")


def normalize_create(payload: Any) -> ResourceCreate:
    """Validate and normalize create input.

    ``name`` must be a string that is non-empty after trimming.
    ``details`` falls back to an empty string when absent or None.

    Raises:
        InvalidResourceInput: If ``name`` is missing, not a string, or blank
    """
    data = _as_mapping(payload)
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise InvalidResourceInput("name is required")

    details = data.get("details")
    if details is None:
        details = ""
    elif not isinstance(details, str):
        raise InvalidResourceInput("details must be a string")

    return ResourceCreate(name=name.strip(), details=details)


def normalize_update(payload: Any) -> ResourceUpdate:
    """Reduce partial update input to the fields that will be applied.

    A ``name`` that is not a string or trims to empty is dropped, as is a
    non-string ``details``. An empty ``details`` string is kept.
    Never raises for malformed field values.
    """
    try:
        data = _as_mapping(payload)
    except InvalidResourceInput:
        data = {}

    changes: dict[str, str] = {}
    name = data.get("name")
    if isinstance(name, str) and name.strip():
        changes["name"] = name.strip()

    details = data.get("details")
    if isinstance(details, str):
        changes["details"] = details

    return ResourceUpdate(**changes)
