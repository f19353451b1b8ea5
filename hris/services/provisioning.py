"""
Auth collaborator: account signup with synchronous profile provisioning,
and removal of an auth identity.

Signup writes the ``users`` row and its ``profiles`` row in one
transaction, keyed by the new user id, so callers get the provisioned
profile back as the acknowledgment instead of polling for it.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hris.core.exceptions import DuplicateEmailError, NotFoundError
from hris.core.security import get_password_hash
from hris.models.profile import Profile
from hris.models.user import Role, User

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def sign_up(
    db: AsyncSession,
    *,
    email: str,
    password: str,
    name: str,
    position: str | None = None,
    date_of_joining: date | None = None,
    role: Role = Role.EMPLOYEE,
) -> Profile:
    """Create a user account and its profile; return the profile."""
    email = email.strip().lower()
    if await get_user_by_email(db, email) is not None:
        raise DuplicateEmailError()

    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        role=role.value,
    )
    user.profile = Profile(
        email=email,
        name=name,
        position=position,
        date_of_joining=date_of_joining or datetime.now(timezone.utc).date(),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup for the same email
        await db.rollback()
        raise DuplicateEmailError() from None

    await db.refresh(user.profile)
    logger.info("Provisioned %s account %s (id %d)", role.value, email, user.id)
    return user.profile


async def delete_identity(db: AsyncSession, user_id: int) -> User:
    """Remove a user; the profile, leaves and attendance go with it."""
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    await db.delete(user)
    await db.commit()
    logger.info("Deleted user %d (%s) and its profile", user_id, user.email)
    return user
