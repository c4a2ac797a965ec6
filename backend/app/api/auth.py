"""Session lookup for the entity API.

Stub implementation that extracts tenant_id/user_id from a bearer token.
Returns None instead of raising; the resource handler turns a missing
session into 401.
"""

from typing import Annotated

from fastapi import Depends, Header

from backend.app.config import Settings, get_settings
from backend.app.db.context import UserSession


def parse_bearer_session(authorization: str) -> UserSession | None:
    """Parse a "Bearer <tenant_id>:<user_id>" header.

    Returns:
        UserSession, or None if the header is malformed
    """
    if not authorization.startswith("Bearer "):
        return None

    token = authorization[7:].strip()  # Strip "Bearer "

    if ":" not in token:
        return None

    tenant_id, user_id = token.split(":", 1)
    if not user_id:
        return None

    return UserSession(user_id=user_id, tenant_id=tenant_id or None)


async def get_user_session(
    settings: Annotated[Settings, Depends(get_settings)],
    authorization: Annotated[str | None, Header()] = None,
) -> UserSession | None:
    """Resolve the caller's session from the Authorization header.

    Without a header, falls back to the dev identity when both dev_tenant_id
    and dev_user_id are configured.

    Args:
        settings: Application settings
        authorization: Authorization header (e.g., "Bearer <token>")

    Returns:
        UserSession, or None when the caller is unauthenticated
    """
    if not authorization:
        if settings.dev_user_id and settings.dev_tenant_id:
            return UserSession(user_id=settings.dev_user_id, tenant_id=settings.dev_tenant_id)
        return None

    return parse_bearer_session(authorization)
