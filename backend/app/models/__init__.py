"""Models package - re-exports for convenience."""

from backend.app.models.entity import (
    CreateEntityInput,
    Entity,
    EntityStatus,
    UpdateEntityInput,
)
from backend.app.models.envelope import ErrorDetail, ErrorResponse, SuccessResponse

__all__ = [
    "CreateEntityInput",
    "Entity",
    "EntityStatus",
    "ErrorDetail",
    "ErrorResponse",
    "SuccessResponse",
    "UpdateEntityInput",
]
