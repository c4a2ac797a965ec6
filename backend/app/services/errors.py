"""Domain errors raised by entity services."""

from enum import Enum


class EntityErrorKind(str, Enum):
    """Why an entity is inaccessible to the caller."""

    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"


class EntityAccessError(Exception):
    """Entity is missing or belongs to another tenant.

    The kind is set by the service; callers must not parse the message.
    """

    def __init__(self, kind: EntityErrorKind, entity_id: str) -> None:
        super().__init__(f"Entity {entity_id}: {kind.value}")
        self.kind = kind
        self.entity_id = entity_id


class EntityStateError(Exception):
    """Entity is in a state that forbids the requested operation."""

    def __init__(self, entity_id: str, message: str) -> None:
        super().__init__(message)
        self.entity_id = entity_id
