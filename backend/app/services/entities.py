"""Entity service protocol consumed by the resource handler."""

from datetime import datetime
from typing import Protocol

from backend.app.models.entity import CreateEntityInput, Entity, EntityStatus, UpdateEntityInput


class EntityService(Protocol):
    """Tenant-scoped entity operations.

    Implementations raise EntityAccessError for records that are missing or
    owned by another tenant, and EntityStateError for forbidden transitions.
    """

    async def create_entity(
        self, tenant_id: str, user_id: str, data: CreateEntityInput
    ) -> Entity:
        """Create a new entity owned by tenant_id."""
        ...

    async def get_entity(self, tenant_id: str, entity_id: str) -> Entity:
        """Get entity by ID.

        Args:
            tenant_id: Tenant scope (enforces tenancy)
            entity_id: Entity ID

        Returns:
            The entity
        """
        ...

    async def update_entity(
        self, tenant_id: str, entity_id: str, user_id: str, data: UpdateEntityInput
    ) -> Entity:
        """Apply the fields set on data and return the updated entity.

        Args:
            tenant_id: Tenant scope (enforces tenancy)
            entity_id: Entity ID
            user_id: Caller performing the update
            data: Partial update; unset fields are left untouched

        Returns:
            The updated entity
        """
        ...

    async def archive_entity(self, tenant_id: str, entity_id: str, user_id: str) -> Entity:
        """Soft delete: move the entity to ARCHIVED."""
        ...

    async def delete_entity(self, tenant_id: str, entity_id: str, user_id: str) -> None:
        """Hard delete. Only ARCHIVED entities may be removed."""
        ...


def archived_at_after(
    status: EntityStatus, archived_at: datetime | None, now: datetime
) -> datetime | None:
    """archived_at that goes with a status change.

    ARCHIVED keeps an existing stamp or sets one; any other status clears it.
    """
    if status is EntityStatus.ARCHIVED:
        return archived_at or now
    return None
