"""Request Dependencies — DB session and bearer-token user resolution.

Invariants:
    - get_db yields one auto-rollback session per request (DatabaseSessionManager)
    - get_current_user raises AuthError for a missing, unknown or expired token
"""

from typing import AsyncGenerator

from fastapi import Depends, Header, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notesync.core.errors import AuthError
from notesync.server.models import AuthToken, User
from notesync.server.security import is_expired


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with request.app.state.db.session() as session:
        yield session


async def get_current_user(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise AuthError("Missing or malformed Authorization header")

    result = await db.execute(
        select(AuthToken).where(AuthToken.token == token),
    )
    issued = result.scalar_one_or_none()
    if issued is None:
        raise AuthError("Invalid session token")
    if is_expired(issued.expires_at):
        raise AuthError("Session expired, please log in again")

    user = await db.get(User, issued.user_id)
    if user is None:
        raise AuthError("Invalid session token")
    return user
