"""
Dashboard aggregation: role-scoped counts of employees, leaves and
today's attendance. Recomputed on every call.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hris.core.access import Identity, scope_to_identity
from hris.models.attendance import Attendance
from hris.models.leave import Leave
from hris.models.profile import Profile
from hris.schemas.dashboard import DashboardStats
from hris.services.attendance import today_utc


async def _count_by_status(db: AsyncSession, stmt) -> dict[str, int]:
    result = await db.execute(stmt)
    return {status: count for status, count in result.all()}


async def compute_stats(db: AsyncSession, identity: Identity) -> DashboardStats:
    total_employees = 0
    if identity.is_admin:
        total_employees = (await db.execute(select(func.count(Profile.id)))).scalar_one()

    leave_stmt = select(Leave.status, func.count(Leave.id)).group_by(Leave.status)
    leaves = await _count_by_status(
        db, scope_to_identity(leave_stmt, Leave.employee_id, identity)
    )

    attendance_stmt = (
        select(Attendance.status, func.count(Attendance.id))
        .where(Attendance.date == today_utc())
        .group_by(Attendance.status)
    )
    attendance = await _count_by_status(
        db, scope_to_identity(attendance_stmt, Attendance.employee_id, identity)
    )

    return DashboardStats(
        total_employees=total_employees,
        pending_leaves=leaves.get("pending", 0),
        approved_leaves=leaves.get("approved", 0),
        rejected_leaves=leaves.get("rejected", 0),
        present_today=attendance.get("present", 0),
        absent_today=attendance.get("absent", 0),
    )
