"""Resource entity models.

``ResourceRow`` is the stored shape (integer key, datetime timestamps).
``Resource`` is the external shape (string id, ISO-8601 timestamp strings,
camelCase timestamp keys on the wire).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ResourceCreate(BaseModel):
    """Validated input for creating a resource."""

    name: str = Field(min_length=1, description="Resource name, already trimmed")
    details: str = Field(default="", description="Free-form details")


class ResourceUpdate(BaseModel):
    """Partial update; fields left as None are not changed."""

    name: str | None = Field(default=None, description="Replacement name")
    details: str | None = Field(default=None, description="Replacement details")

    def is_empty(self) -> bool:
        """True when applying this update changes no field content."""
        return self.name is None and self.details is None


class ResourceRow(BaseModel):
    """A record as read from the resources table."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str
    details: str
    created_at: datetime
    updated_at: datetime


class Resource(BaseModel):
    """External representation of a stored resource."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(description="Decimal string form of the internal key")
    name: str
    details: str
    created_at: str = Field(alias="createdAt", description="ISO-8601 creation time")
    updated_at: str = Field(alias="updatedAt", description="ISO-8601 last write time")


class ResourcePage(BaseModel):
    """One page of a filtered resource listing."""

    total: int = Field(ge=0, description="Records matching the filter, ignoring paging")
    limit: int = Field(description="Page size actually applied")
    offset: int = Field(description="Offset actually applied")
    items: list[Resource] = Field(default_factory=list)
