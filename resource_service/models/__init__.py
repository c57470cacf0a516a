"""Domain models for the resource service.

Exports:
    Resource: External representation returned to callers
    ResourceCreate: Normalized create input
    ResourceUpdate: Normalized partial update input
    ResourcePage: Result of a filtered, paginated list
    ResourceRow: Typed stored record
"""

from resource_service.models.resource import (
    Resource,
    ResourceCreate,
    ResourcePage,
    ResourceRow,
    ResourceUpdate,
)

__all__ = [
    "Resource",
    "ResourceCreate",
    "ResourcePage",
    "ResourceRow",
    "ResourceUpdate",
]
