"""Request-scoped identity and tenancy values."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserSession:
    """Authenticated caller identity.

    A session without a user_id is treated as unauthenticated.
    """

    user_id: str
    tenant_id: str | None = None


@dataclass(frozen=True)
class TenantContext:
    """Tenant scope for a single request.

    Used to enforce tenancy boundaries in all entity operations.
    """

    tenant_id: str
