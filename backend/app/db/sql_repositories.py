"""SQL implementation of the entity service."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.models import EntityRow
from backend.app.models.entity import (
    CreateEntityInput,
    Entity,
    EntityStatus,
    UpdateEntityInput,
)
from backend.app.services.entities import archived_at_after
from backend.app.services.errors import EntityAccessError, EntityErrorKind, EntityStateError


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops the offset on DateTime(timezone=True) columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_entity(row: EntityRow) -> Entity:
    return Entity(
        id=row.entity_id,
        tenant_id=row.tenant_id,
        name=row.name,
        legal_form=row.legal_form,
        status=EntityStatus(row.status),
        activity_code=row.activity_code,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
        updated_by=row.updated_by,
        archived_at=_as_utc(row.archived_at),
    )


class SqlEntityService:
    """SQL implementation of EntityService.

    One instance per request; the session is owned by the caller.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_scoped(self, tenant_id: str, entity_id: str) -> EntityRow:
        result = await self._session.execute(
            select(EntityRow).where(EntityRow.entity_id == entity_id)
        )
        row = result.scalar_one_or_none()

        if row is None:
            raise EntityAccessError(EntityErrorKind.NOT_FOUND, entity_id)

        # Enforce tenancy
        if row.tenant_id != tenant_id:
            raise EntityAccessError(EntityErrorKind.UNAUTHORIZED, entity_id)

        return row

    async def create_entity(
        self, tenant_id: str, user_id: str, data: CreateEntityInput
    ) -> Entity:
        """Create a new entity."""
        now = datetime.now(timezone.utc)
        row = EntityRow(
            entity_id=str(uuid.uuid4()),
            tenant_id=tenant_id,
            name=data.name,
            legal_form=data.legal_form,
            status=data.status.value,
            activity_code=data.activity_code,
            created_at=now,
            updated_at=now,
            updated_by=user_id,
        )

        self._session.add(row)
        entity = _to_entity(row)
        await self._session.commit()
        return entity

    async def get_entity(self, tenant_id: str, entity_id: str) -> Entity:
        """Get entity by ID."""
        row = await self._get_scoped(tenant_id, entity_id)
        return _to_entity(row)

    async def update_entity(
        self, tenant_id: str, entity_id: str, user_id: str, data: UpdateEntityInput
    ) -> Entity:
        """Apply the fields set on data."""
        row = await self._get_scoped(tenant_id, entity_id)
        now = datetime.now(timezone.utc)

        for field, value in data.changes().items():
            if isinstance(value, EntityStatus):
                row.archived_at = archived_at_after(value, _as_utc(row.archived_at), now)
                value = value.value
            setattr(row, field, value)

        row.updated_at = now
        row.updated_by = user_id

        entity = _to_entity(row)
        await self._session.commit()
        return entity

    async def archive_entity(self, tenant_id: str, entity_id: str, user_id: str) -> Entity:
        """Move the entity to ARCHIVED."""
        row = await self._get_scoped(tenant_id, entity_id)
        now = datetime.now(timezone.utc)

        row.status = EntityStatus.ARCHIVED.value
        if row.archived_at is None:
            row.archived_at = now
        row.updated_at = now
        row.updated_by = user_id

        entity = _to_entity(row)
        await self._session.commit()
        return entity

    async def delete_entity(self, tenant_id: str, entity_id: str, user_id: str) -> None:
        """Remove an archived entity."""
        row = await self._get_scoped(tenant_id, entity_id)

        if row.status != EntityStatus.ARCHIVED.value:
            raise EntityStateError(
                entity_id, "Entity must be archived before permanent deletion"
            )

        await self._session.delete(row)
        await self._session.commit()
