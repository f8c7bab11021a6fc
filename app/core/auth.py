"""
Request authentication.

Validates the Supabase bearer token and resolves the local user. Routers
only ever see the trusted user id.
"""
import logging
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.supabase_client import get_supabase_admin_client
from app.services.gig_store import get_or_create_user

logger = logging.getLogger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(
    db: Annotated[AsyncSession, Depends(get_db)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> UUID:
    """Resolve the bearer token to the local user id."""
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Unauthorized: missing token")

    token = authorization[len("Bearer "):]

    try:
        response = get_supabase_admin_client().auth.get_user(token)
    except Exception as e:
        logger.warning(f"Token validation failed: {e}")
        raise _unauthorized("Unauthorized: invalid token")

    auth_user = getattr(response, "user", None)
    if auth_user is None:
        raise _unauthorized("Unauthorized: no user data")

    metadata = getattr(auth_user, "user_metadata", None) or {}
    user = await get_or_create_user(
        db,
        supabase_id=str(auth_user.id),
        email=auth_user.email or "",
        name=metadata.get("name"),
    )
    return user.id


CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
