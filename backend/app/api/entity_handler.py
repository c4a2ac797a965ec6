"""Entity resource handler - GET/PATCH/DELETE on a single entity.

Every operation follows the same sequence:
authenticate -> resolve tenant -> (validate body) -> call service -> map outcome.

The handler never raises. Service failures are mapped to a JSON envelope:
- missing session or user id -> 401
- EntityAccessError (not found / other tenant) -> 404, one generic message
- invalid PATCH payload -> 400 with field-level details
- anything else -> 500, detail only in the log
"""

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from backend.app.api.tenancy import TenantResolver
from backend.app.db.context import UserSession
from backend.app.models.entity import Entity, UpdateEntityInput
from backend.app.models.envelope import ErrorDetail, ErrorResponse
from backend.app.services.entities import EntityService
from backend.app.services.errors import EntityAccessError, EntityErrorKind
from backend.app.utils.logging import EntityEventLogger

UNAUTHORIZED_MESSAGE = "Unauthorized"
NOT_FOUND_MESSAGE = "Not found or unauthorized"
VALIDATION_MESSAGE = "Validation error"
INTERNAL_MESSAGE = "Internal server error"

# Not-found and cross-tenant access must be indistinguishable to callers.
ACCESS_ERROR_STATUS: dict[EntityErrorKind, int] = {
    EntityErrorKind.NOT_FOUND: 404,
    EntityErrorKind.UNAUTHORIZED: 404,
}

_OUTCOMES = {200: "ok", 400: "invalid", 401: "unauthorized", 404: "not_found", 500: "error"}


@dataclass(frozen=True)
class HandlerResponse:
    """Status code plus JSON-ready body."""

    status_code: int
    body: dict[str, Any]


# Metrics interface (to be implemented by actual metrics system)
class EntityMetrics:
    """Interface for entity endpoint metrics."""

    def record(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Record a finished request."""
        pass


def _success(data: Entity | None = None, message: str | None = None) -> HandlerResponse:
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data.model_dump(mode="json", by_alias=True)
    if message is not None:
        body["message"] = message
    return HandlerResponse(status_code=200, body=body)


def _failure(
    status_code: int, error: str, details: list[ErrorDetail] | None = None
) -> HandlerResponse:
    envelope = ErrorResponse(error=error, details=details)
    return HandlerResponse(
        status_code=status_code,
        body=envelope.model_dump(mode="json", exclude_none=True),
    )


def validation_details(exc: ValidationError) -> list[ErrorDetail]:
    """Flatten a pydantic ValidationError into per-field details."""
    return [
        ErrorDetail(
            field=".".join(str(loc) for loc in e["loc"]) or "body",
            message=e["msg"],
            type=e["type"],
        )
        for e in exc.errors(include_url=False)
    ]


def parse_update_input(raw_body: Any) -> UpdateEntityInput:
    """Validate a raw PATCH payload.

    Accepts undecoded bytes/str (malformed JSON becomes a validation error)
    or an already-decoded JSON value.

    Raises:
        ValidationError: If the payload violates the update contract
    """
    if isinstance(raw_body, (bytes, bytearray, str)):
        return UpdateEntityInput.model_validate_json(raw_body)
    return UpdateEntityInput.model_validate(raw_body)


class EntityResourceHandler:
    """Request handler for a single entity resource."""

    def __init__(
        self,
        service: EntityService,
        tenants: TenantResolver,
        events: EntityEventLogger | None = None,
        metrics: EntityMetrics | None = None,
    ) -> None:
        """Initialize handler.

        Args:
            service: Tenant-scoped entity operations
            tenants: Resolves the tenant for an authenticated session
            events: Structured logger (optional, defaults to module logger)
            metrics: Metrics recorder (optional, defaults to no-op)
        """
        self._service = service
        self._tenants = tenants
        self._events = events or EntityEventLogger()
        self._metrics = metrics or EntityMetrics()

    async def get_resource(self, session: UserSession | None, entity_id: str) -> HandlerResponse:
        """GET /entities/{id}."""

        async def fetch(user: UserSession) -> HandlerResponse:
            ctx = await self._tenants.get_context(user)
            entity = await self._service.get_entity(ctx.tenant_id, entity_id)
            return _success(data=entity)

        return await self._run("get", "fetching", session, entity_id, fetch)

    async def update_resource(
        self, session: UserSession | None, entity_id: str, raw_body: Any
    ) -> HandlerResponse:
        """PATCH /entities/{id}.

        Args:
            session: Caller session, None if unauthenticated
            entity_id: Entity ID from the path
            raw_body: Request body, raw bytes or decoded JSON
        """

        async def update(user: UserSession) -> HandlerResponse:
            ctx = await self._tenants.get_context(user)

            try:
                data = parse_update_input(raw_body)
            except ValidationError as e:
                return _failure(400, VALIDATION_MESSAGE, validation_details(e))

            entity = await self._service.update_entity(ctx.tenant_id, entity_id, user.user_id, data)
            self._events.entity_updated(entity.id)
            return _success(data=entity)

        return await self._run("update", "updating", session, entity_id, update)

    async def delete_resource(
        self, session: UserSession | None, entity_id: str, permanent: bool = False
    ) -> HandlerResponse:
        """DELETE /entities/{id}: archive, or hard delete when permanent."""

        async def delete(user: UserSession) -> HandlerResponse:
            ctx = await self._tenants.get_context(user)

            if permanent:
                # Service rejects entities that are not archived yet
                await self._service.delete_entity(ctx.tenant_id, entity_id, user.user_id)
            else:
                await self._service.archive_entity(ctx.tenant_id, entity_id, user.user_id)

            self._events.entity_removed(entity_id, permanent)
            return _success(message="Entity deleted" if permanent else "Entity archived")

        return await self._run("delete", "deleting", session, entity_id, delete)

    async def _run(
        self,
        operation: str,
        action: str,
        session: UserSession | None,
        entity_id: str,
        fn: Callable[[UserSession], Awaitable[HandlerResponse]],
    ) -> HandlerResponse:
        """Authenticate, run the operation, map failures, record metrics."""
        start_time = time.monotonic()

        if session is None or not session.user_id:
            response = _failure(401, UNAUTHORIZED_MESSAGE)
        else:
            try:
                response = await fn(session)
            except EntityAccessError as e:
                response = _failure(ACCESS_ERROR_STATUS[e.kind], NOT_FOUND_MESSAGE)
            except Exception as e:
                self._events.operation_failed(action, entity_id, e)
                response = _failure(500, INTERNAL_MESSAGE)

        elapsed_ms = (time.monotonic() - start_time) * 1000
        self._metrics.record(operation, _OUTCOMES.get(response.status_code, "error"), elapsed_ms)
        return response
