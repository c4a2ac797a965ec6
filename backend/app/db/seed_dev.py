"""Dev seeding helper for stub authentication."""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.engine import get_async_engine
from backend.app.db.models import EntityRow
from backend.app.db.sql_repositories import SqlEntityService
from backend.app.models.entity import CreateEntityInput, Entity

# Use these as DEV_TENANT_ID / DEV_USER_ID in .env to call the API without a token
DEV_TENANT_ID = "dev-tenant"
DEV_USER_ID = "dev-user"
DEV_ENTITY_NAME = "Dev Holdings"


async def seed_dev_entity(session: AsyncSession) -> Entity | None:
    """Seed one dev entity for the dev tenant.

    This function is idempotent - safe to run multiple times.

    Returns:
        The created entity, or None if it already existed
    """
    result = await session.execute(
        select(EntityRow).where(
            EntityRow.tenant_id == DEV_TENANT_ID,
            EntityRow.name == DEV_ENTITY_NAME,
        )
    )
    if result.scalars().first() is not None:
        return None

    service = SqlEntityService(session)
    return await service.create_entity(
        DEV_TENANT_ID,
        DEV_USER_ID,
        CreateEntityInput(name=DEV_ENTITY_NAME, legal_form="LLC", activity_code="6420"),
    )


async def main() -> None:
    """Seed the configured database."""
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        entity = await seed_dev_entity(session)

    if entity is None:
        print(f"Dev entity already exists for tenant {DEV_TENANT_ID}")
    else:
        print(f"Created dev entity {entity.id} for tenant {DEV_TENANT_ID}")


if __name__ == "__main__":
    asyncio.run(main())
