"""
Leave workflow: list, submit, and approve/reject leave requests.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hris.core.access import Identity, ensure_admin, ensure_owner_or_admin, scope_to_identity
from hris.core.config import settings
from hris.core.exceptions import InvalidTransitionError, NotFoundError
from hris.models.leave import Leave, LeaveStatus
from hris.models.profile import Profile
from hris.schemas.leave import LeaveCreate, LeaveRead
from hris.schemas.profile import EmployeeSummary

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset({LeaveStatus.APPROVED.value, LeaveStatus.REJECTED.value})


def _to_read(leave: Leave, name: str | None = None, email: str | None = None) -> LeaveRead:
    return LeaveRead(
        id=leave.id,
        employee_id=leave.employee_id,
        leave_type=leave.leave_type,
        start_date=leave.start_date,
        end_date=leave.end_date,
        reason=leave.reason,
        status=leave.status,
        created_at=leave.created_at,
        profile=EmployeeSummary(name=name, email=email) if name or email else None,
    )


async def list_leaves(db: AsyncSession, identity: Identity) -> list[LeaveRead]:
    """All leaves for an admin, the caller's own otherwise; newest first."""
    stmt = (
        select(Leave, Profile.name, Profile.email)
        .outerjoin(Profile, Leave.employee_id == Profile.id)
        .order_by(Leave.created_at.desc(), Leave.id.desc())
    )
    stmt = scope_to_identity(stmt, Leave.employee_id, identity)
    result = await db.execute(stmt)
    return [_to_read(leave, name, email) for leave, name, email in result.all()]


async def get_leave(db: AsyncSession, identity: Identity, leave_id: int) -> LeaveRead:
    result = await db.execute(
        select(Leave, Profile.name, Profile.email)
        .outerjoin(Profile, Leave.employee_id == Profile.id)
        .where(Leave.id == leave_id)
    )
    row = result.one_or_none()
    if row is None:
        raise NotFoundError("Leave request not found")
    leave, name, email = row
    ensure_owner_or_admin(identity, leave.employee_id)
    return _to_read(leave, name, email)


async def submit_leave(db: AsyncSession, identity: Identity, body: LeaveCreate) -> LeaveRead:
    """File a leave request for the caller. New requests are always pending."""
    leave = Leave(
        employee_id=identity.user_id,
        leave_type=body.leave_type.value,
        start_date=body.start_date,
        end_date=body.end_date,
        reason=body.reason,
        status=LeaveStatus.PENDING.value,
    )
    db.add(leave)
    await db.commit()
    await db.refresh(leave)
    logger.info(
        "Leave %d submitted by user %d (%s, %s to %s)",
        leave.id,
        identity.user_id,
        leave.leave_type,
        leave.start_date,
        leave.end_date,
    )
    return _to_read(leave, identity.name, identity.email)


async def set_leave_status(
    db: AsyncSession,
    identity: Identity,
    leave_id: int,
    new_status: LeaveStatus | str,
) -> LeaveRead:
    """Approve or reject a leave (admin only).

    A leave that already reached approved/rejected is not moved again
    unless ``LEAVE_ALLOW_RETRANSITION`` is set.
    """
    ensure_admin(identity, "Only administrators can approve or reject leave requests")

    new_status = LeaveStatus(new_status)
    if new_status.value not in TERMINAL_STATUSES:
        raise InvalidTransitionError("Leave status can only be set to approved or rejected")

    leave = await db.get(Leave, leave_id)
    if leave is None:
        raise NotFoundError("Leave request not found")

    if leave.status in TERMINAL_STATUSES and not settings.LEAVE_ALLOW_RETRANSITION:
        raise InvalidTransitionError(f"Leave request is already {leave.status}")

    previous = leave.status
    leave.status = new_status.value
    await db.commit()
    await db.refresh(leave)
    logger.info(
        "Leave %d moved %s -> %s by admin %d",
        leave_id,
        previous,
        leave.status,
        identity.user_id,
    )

    profile = await db.get(Profile, leave.employee_id)
    return _to_read(
        leave,
        profile.name if profile else None,
        profile.email if profile else None,
    )
