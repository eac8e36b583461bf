"""Auth Routes — account registration and token issuing.

Invariants:
    - POST /register → 201, 409 if the email is taken, 400 on invalid body
    - POST /login → 200 with {"token"}, 401 on unknown email or wrong password
    - Login failure message never reveals which of email/password was wrong
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notesync.core.errors import AuthError, ConflictError
from notesync.schemas.auth import (
    Credentials, LoginResponse, RegisterCredentials, RegisterResponse,
)
from notesync.server.dependencies import get_db
from notesync.server.models import AuthToken, User
from notesync.server.security import (
    hash_password, new_token, token_expiry, verify_password,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.post(
    "/register", response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterCredentials, db: AsyncSession = Depends(get_db),
):
    """Create an account."""
    email = body.email.lower()
    existing = await db.execute(select(User.id).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("An account with this email already exists")

    user = User(email=email, password_hash=hash_password(body.password))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info(f"User {user.id} registered")
    return RegisterResponse(id=user.id, email=user.email)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: Credentials, request: Request, db: AsyncSession = Depends(get_db),
):
    """Issue a bearer token for valid credentials."""
    result = await db.execute(
        select(User).where(User.email == body.email.lower()),
    )
    user = result.scalar_one_or_none()
    if user is None or not verify_password(body.password, user.password_hash):
        raise AuthError("Invalid email or password")

    ttl_hours = request.app.state.settings.server_token_ttl_hours
    token = AuthToken(
        token=new_token(), user_id=user.id, expires_at=token_expiry(ttl_hours),
    )
    db.add(token)
    await db.commit()
    logger.info(f"User {user.id} logged in")
    return LoginResponse(token=token.token)
