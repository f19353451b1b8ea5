"""
Attendance endpoints — daily self check-in and history.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hris.api.v1.deps import get_db, get_identity
from hris.core.access import Identity
from hris.schemas.attendance import (AttendanceMark, AttendanceRead,
                                     MarkAttendanceResponse, TodayStatus)
from hris.services import attendance as attendance_service

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.get("", response_model=list[AttendanceRead])
async def list_attendance(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> list[AttendanceRead]:
    return await attendance_service.list_attendance(db, identity)


@router.get("/today", response_model=TodayStatus)
async def today_status(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> TodayStatus:
    """Whether the caller has already marked attendance today."""
    return TodayStatus(
        date=attendance_service.today_utc(),
        marked=await attendance_service.has_marked_today(db, identity),
    )


@router.post(
    "",
    response_model=MarkAttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"model": MarkAttendanceResponse, "description": "Already marked today"}},
)
async def mark_attendance(
    body: AttendanceMark,
    response: Response,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> MarkAttendanceResponse:
    """Mark the caller present or absent for today. A second mark is not an error."""
    outcome = await attendance_service.mark_attendance(db, identity, body.status)
    if not outcome.created:
        response.status_code = status.HTTP_200_OK
        return MarkAttendanceResponse(outcome="already_marked", message=outcome.message)
    return MarkAttendanceResponse(outcome="marked", message=outcome.message, record=outcome.record)
