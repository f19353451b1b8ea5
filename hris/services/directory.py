"""
Employee directory (admin only): profile CRUD plus account creation and
deletion through the auth collaborator.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hris.core.exceptions import NotFoundError
from hris.models.profile import Profile
from hris.schemas.profile import EmployeeCreate, EmployeeUpdate
from hris.services import provisioning
from hris.services.functions_client import FunctionsClient

logger = logging.getLogger(__name__)


async def list_employees(db: AsyncSession) -> list[Profile]:
    result = await db.execute(
        select(Profile).order_by(Profile.date_of_joining.desc(), Profile.id.desc())
    )
    return list(result.scalars().all())


async def get_employee(db: AsyncSession, employee_id: int) -> Profile:
    profile = await db.get(Profile, employee_id)
    if profile is None:
        raise NotFoundError("Employee not found")
    return profile


async def create_employee(db: AsyncSession, body: EmployeeCreate) -> Profile:
    profile = await provisioning.sign_up(
        db,
        email=body.email,
        password=body.password,
        name=body.name,
        position=body.position,
        date_of_joining=body.date_of_joining,
    )
    logger.info("Created employee %s (id %d)", profile.email, profile.id)
    return profile


async def update_employee(db: AsyncSession, employee_id: int, body: EmployeeUpdate) -> Profile:
    profile = await get_employee(db, employee_id)

    # position is the only field that may be cleared with null
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)

    await db.commit()
    await db.refresh(profile)
    logger.info("Updated employee %d", employee_id)
    return profile


async def delete_employee(client: FunctionsClient, access_token: str, employee_id: int) -> None:
    """Delete the account and its profile through the privileged function."""
    await client.delete_user(access_token, employee_id)
    logger.info("Employee %d deleted via privileged function", employee_id)
