"""Repository layer for data persistence.

Repositories encapsulate data access logic and provide a clean interface
for the transport layer.
"""

from resource_service.repositories.resource_repo import ResourceRepository

__all__ = [
    "ResourceRepository",
]
