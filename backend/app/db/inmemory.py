"""In-memory implementation of the entity service."""

import uuid
from datetime import datetime, timezone

from backend.app.models.entity import (
    CreateEntityInput,
    Entity,
    EntityStatus,
    UpdateEntityInput,
)
from backend.app.services.entities import archived_at_after
from backend.app.services.errors import EntityAccessError, EntityErrorKind, EntityStateError


class InMemoryEntityService:
    """In-memory implementation of EntityService."""

    def __init__(self) -> None:
        self._entities: dict[str, Entity] = {}

    def _get_scoped(self, tenant_id: str, entity_id: str) -> Entity:
        record = self._entities.get(entity_id)

        if record is None:
            raise EntityAccessError(EntityErrorKind.NOT_FOUND, entity_id)

        # Enforce tenancy
        if record.tenant_id != tenant_id:
            raise EntityAccessError(EntityErrorKind.UNAUTHORIZED, entity_id)

        return record

    def seed(self, *entities: Entity) -> None:
        """Store entities as-is (test and local fixtures)."""
        for entity in entities:
            self._entities[entity.id] = entity

    async def create_entity(
        self, tenant_id: str, user_id: str, data: CreateEntityInput
    ) -> Entity:
        """Create a new entity."""
        now = datetime.now(timezone.utc)
        entity = Entity(
            id=str(uuid.uuid4()),
            tenant_id=tenant_id,
            name=data.name,
            legal_form=data.legal_form,
            status=data.status,
            activity_code=data.activity_code,
            created_at=now,
            updated_at=now,
            updated_by=user_id,
        )
        self._entities[entity.id] = entity
        return entity

    async def get_entity(self, tenant_id: str, entity_id: str) -> Entity:
        """Get entity by ID."""
        return self._get_scoped(tenant_id, entity_id)

    async def update_entity(
        self, tenant_id: str, entity_id: str, user_id: str, data: UpdateEntityInput
    ) -> Entity:
        """Apply the fields set on data."""
        record = self._get_scoped(tenant_id, entity_id)
        now = datetime.now(timezone.utc)
        changes = data.changes()

        if "status" in changes:
            changes["archived_at"] = archived_at_after(changes["status"], record.archived_at, now)

        updated = record.model_copy(
            update={**changes, "updated_at": now, "updated_by": user_id}
        )
        self._entities[entity_id] = updated
        return updated

    async def archive_entity(self, tenant_id: str, entity_id: str, user_id: str) -> Entity:
        """Move the entity to ARCHIVED."""
        record = self._get_scoped(tenant_id, entity_id)
        now = datetime.now(timezone.utc)

        archived = record.model_copy(
            update={
                "status": EntityStatus.ARCHIVED,
                "archived_at": record.archived_at or now,
                "updated_at": now,
                "updated_by": user_id,
            }
        )
        self._entities[entity_id] = archived
        return archived

    async def delete_entity(self, tenant_id: str, entity_id: str, user_id: str) -> None:
        """Remove an archived entity."""
        record = self._get_scoped(tenant_id, entity_id)

        if record.status != EntityStatus.ARCHIVED:
            raise EntityStateError(
                entity_id, "Entity must be archived before permanent deletion"
            )

        del self._entities[entity_id]
