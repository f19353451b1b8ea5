"""
Attendance workflow: daily self check-in and role-scoped history.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hris.core.access import Identity, scope_to_identity
from hris.core.config import settings
from hris.models.attendance import Attendance, AttendanceStatus
from hris.models.profile import Profile
from hris.schemas.attendance import AttendanceRead
from hris.schemas.profile import EmployeeSummary

logger = logging.getLogger(__name__)

ALREADY_MARKED_MESSAGE = "Attendance already marked for today"


@dataclass
class MarkOutcome:
    created: bool
    message: str
    record: AttendanceRead | None = None


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def _to_read(row: Attendance, name: str | None = None, email: str | None = None) -> AttendanceRead:
    return AttendanceRead(
        id=row.id,
        employee_id=row.employee_id,
        date=row.date,
        status=row.status,
        created_at=row.created_at,
        profile=EmployeeSummary(name=name, email=email) if name or email else None,
    )


async def has_marked_today(db: AsyncSession, identity: Identity) -> bool:
    """True when the caller already has a record for today.

    A failed lookup is reported as "not marked"; a later mark attempt
    still hits the uniqueness constraint.
    """
    try:
        result = await db.execute(
            select(Attendance.id).where(
                Attendance.employee_id == identity.user_id,
                Attendance.date == today_utc(),
            )
        )
        return result.first() is not None
    except SQLAlchemyError as e:
        logger.warning("Could not check today's attendance for user %d: %s", identity.user_id, e)
        return False


async def mark_attendance(
    db: AsyncSession,
    identity: Identity,
    status: AttendanceStatus | str,
) -> MarkOutcome:
    """Record today's presence for the caller, at most once per day."""
    status = AttendanceStatus(status)
    record = Attendance(
        employee_id=identity.user_id,
        date=today_utc(),
        status=status.value,
    )
    day = record.date
    db.add(record)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        # only a clash on (employee_id, date) means "already marked"
        existing = await db.execute(
            select(Attendance.id).where(
                Attendance.employee_id == identity.user_id,
                Attendance.date == day,
            )
        )
        if existing.first() is None:
            logger.error("Attendance insert for user %d failed on %s", identity.user_id, day)
            raise
        logger.info("User %d tried to mark attendance twice on %s", identity.user_id, day)
        return MarkOutcome(created=False, message=ALREADY_MARKED_MESSAGE)

    await db.refresh(record)
    logger.info("User %d marked %s for %s", identity.user_id, record.status, record.date)
    return MarkOutcome(
        created=True,
        message=f"Marked as {record.status} for today",
        record=_to_read(record, identity.name, identity.email),
    )


async def list_attendance(db: AsyncSession, identity: Identity) -> list[AttendanceRead]:
    """Most recent attendance records visible to the caller."""
    stmt = (
        select(Attendance, Profile.name, Profile.email)
        .outerjoin(Profile, Attendance.employee_id == Profile.id)
        .order_by(Attendance.date.desc(), Attendance.id.desc())
        .limit(settings.ATTENDANCE_HISTORY_LIMIT)
    )
    stmt = scope_to_identity(stmt, Attendance.employee_id, identity)
    result = await db.execute(stmt)
    return [_to_read(row, name, email) for row, name, email in result.all()]
