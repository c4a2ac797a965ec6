"""Entity domain models and request payloads."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class EntityStatus(str, Enum):
    """Lifecycle status of an entity."""

    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    ARCHIVED = "ARCHIVED"
    SUSPENDED = "SUSPENDED"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Entity(CamelModel):
    """Entity record as returned by the entity service."""

    id: str
    tenant_id: str
    name: str
    legal_form: str | None = None
    status: EntityStatus
    activity_code: str | None = None
    created_at: datetime
    updated_at: datetime
    updated_by: str | None = None
    archived_at: datetime | None = None


class UpdateEntityInput(CamelModel):
    """Partial update payload for PATCH /entities/{id}.

    Every field is optional. Fields left out of the payload are untouched
    by the update; fields that are present must be valid and non-null.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    legal_form: str | None = None
    status: EntityStatus | None = None
    activity_code: str | None = None

    @field_validator("name", "legal_form", "status", "activity_code", mode="before")
    @classmethod
    def reject_explicit_null(cls, value: Any) -> Any:
        """Fields may be omitted but not sent as null."""
        if value is None:
            raise ValueError("Field may be omitted but not null")
        return value

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller actually sent (snake_case keys)."""
        return self.model_dump(exclude_unset=True)


class CreateEntityInput(CamelModel):
    """Payload for creating an entity (seeding and service callers)."""

    name: str = Field(..., min_length=1, max_length=255)
    legal_form: str | None = None
    status: EntityStatus = EntityStatus.ACTIVE
    activity_code: str | None = None
