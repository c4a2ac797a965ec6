"""Response envelopes shared by the entity endpoints."""

from typing import Literal

from pydantic import BaseModel

from backend.app.models.entity import Entity


class SuccessResponse(BaseModel):
    """Success envelope: carries either data or a message."""

    success: Literal[True] = True
    data: Entity | None = None
    message: str | None = None


class ErrorDetail(BaseModel):
    """Single field-level validation failure."""

    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Failure envelope."""

    error: str
    details: list[ErrorDetail] | None = None
