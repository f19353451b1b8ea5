"""
FastAPI dependencies — database session, auth guards and identity context.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hris.core.access import Identity, ensure_admin
from hris.core.config import settings
from hris.core.security import decode_token, subject_as_user_id
from hris.db.session import async_session_factory
from hris.models.user import User
from hris.services.functions_client import FunctionsClient

# auto_error=False so the cookie can be tried when the header is missing
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_PREFIX}/auth/login",
    auto_error=False,
)


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Auth dependencies ───────────────────────────────────────────────
async def get_access_token(
    token: Optional[str] = Depends(oauth2_scheme),
    access_token: Optional[str] = Cookie(default=None),
) -> str:
    """Bearer token from the Authorization header, else the HttpOnly cookie."""
    final_token = token
    if not final_token and access_token:
        if access_token.startswith("Bearer "):
            final_token = access_token.split(" ", 1)[1]
        else:
            final_token = access_token

    if not final_token:
        raise _credentials_exception()
    return final_token


async def load_user_for_token(db: AsyncSession, token: str) -> User | None:
    """Resolve an access token to an active user with its profile loaded."""
    user_id = subject_as_user_id(decode_token(token))
    if user_id is None:
        return None
    result = await db.execute(
        select(User).options(selectinload(User.profile)).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()
    if user is None or not user.is_active:
        return None
    return user


async def get_current_user(
    token: str = Depends(get_access_token),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await load_user_for_token(db, token)
    if user is None:
        raise _credentials_exception()
    return user


async def get_identity(current_user: User = Depends(get_current_user)) -> Identity:
    """Identity context for the request: who the caller is and whether they are admin."""
    profile = current_user.profile
    return Identity(
        user_id=current_user.id,
        email=current_user.email,
        name=profile.name if profile else None,
        role=current_user.role,
    )


async def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    """Only allow the admin role to proceed."""
    ensure_admin(identity)
    return identity


# ── Privileged functions ────────────────────────────────────────────
async def get_functions_client() -> AsyncGenerator[FunctionsClient, None]:
    async with FunctionsClient() as client:
        yield client
