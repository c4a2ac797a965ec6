"""Entity endpoints - GET/PATCH/DELETE /entities/{entity_id}."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.auth import get_user_session
from backend.app.api.entity_handler import EntityResourceHandler, HandlerResponse
from backend.app.api.tenancy import SessionTenantResolver, TenantResolver
from backend.app.config import Settings, get_settings
from backend.app.db.context import UserSession
from backend.app.db.engine import get_session
from backend.app.db.sql_repositories import SqlEntityService
from backend.app.models.envelope import ErrorResponse, SuccessResponse
from backend.app.services.entities import EntityService
from backend.app.utils.logging import EntityEventLogger
from backend.app.utils.metrics import PrometheusEntityMetrics

router = APIRouter(prefix="/entities", tags=["entities"])

_events = EntityEventLogger()
_metrics = PrometheusEntityMetrics()

_RESPONSES: dict[int | str, dict] = {
    200: {"model": SuccessResponse},
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_entity_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> EntityService:
    """FastAPI dependency for the request-scoped entity service."""
    return SqlEntityService(session)


def get_tenant_resolver(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TenantResolver:
    """FastAPI dependency for tenant resolution."""
    return SessionTenantResolver(default_tenant_id=settings.default_tenant_id)


def get_entity_handler(
    service: Annotated[EntityService, Depends(get_entity_service)],
    tenants: Annotated[TenantResolver, Depends(get_tenant_resolver)],
) -> EntityResourceHandler:
    """FastAPI dependency wiring the resource handler."""
    return EntityResourceHandler(service, tenants, events=_events, metrics=_metrics)


def _to_json(response: HandlerResponse) -> JSONResponse:
    return JSONResponse(status_code=response.status_code, content=response.body)


@router.get("/{entity_id}", response_model=None, responses=_RESPONSES)
async def get_entity(
    entity_id: str,
    session: Annotated[UserSession | None, Depends(get_user_session)],
    handler: Annotated[EntityResourceHandler, Depends(get_entity_handler)],
) -> JSONResponse:
    """Get entity details."""
    return _to_json(await handler.get_resource(session, entity_id))


@router.patch("/{entity_id}", response_model=None, responses=_RESPONSES)
async def update_entity(
    entity_id: str,
    request: Request,
    session: Annotated[UserSession | None, Depends(get_user_session)],
    handler: Annotated[EntityResourceHandler, Depends(get_entity_handler)],
) -> JSONResponse:
    """Update entity.

    The body is read raw so validation failures use the entity error
    envelope instead of FastAPI's default 422.
    """
    raw_body = await request.body()
    return _to_json(await handler.update_resource(session, entity_id, raw_body))


@router.delete("/{entity_id}", response_model=None, responses=_RESPONSES)
async def delete_entity(
    entity_id: str,
    session: Annotated[UserSession | None, Depends(get_user_session)],
    handler: Annotated[EntityResourceHandler, Depends(get_entity_handler)],
    permanent: Annotated[str | None, Query()] = None,
) -> JSONResponse:
    """Archive entity, or delete it permanently with ?permanent=true."""
    return _to_json(
        await handler.delete_resource(session, entity_id, permanent=permanent == "true")
    )
