"""Tenant resolution for authenticated requests."""

from typing import Protocol

from backend.app.db.context import TenantContext, UserSession


class TenantResolutionError(Exception):
    """No tenant could be resolved for the session."""

    pass


class TenantResolver(Protocol):
    """Resolves the tenant scope of a request."""

    async def get_context(self, session: UserSession) -> TenantContext:
        """Return the tenant context for an authenticated session."""
        ...


class SessionTenantResolver:
    """Takes the tenant from the session, falling back to a configured default."""

    def __init__(self, default_tenant_id: str | None = None) -> None:
        self._default_tenant_id = default_tenant_id

    async def get_context(self, session: UserSession) -> TenantContext:
        """Resolve tenant context.

        Raises:
            TenantResolutionError: If neither the session nor the settings name a tenant
        """
        tenant_id = session.tenant_id or self._default_tenant_id
        if not tenant_id:
            raise TenantResolutionError(f"No tenant for user {session.user_id}")
        return TenantContext(tenant_id=tenant_id)
