"""Pydantic schemas for daily attendance."""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel

from hris.models.attendance import AttendanceStatus
from hris.schemas.profile import EmployeeSummary


class AttendanceMark(BaseModel):
    status: AttendanceStatus


class AttendanceRead(BaseModel):
    id: int
    employee_id: int
    date: dt.date
    status: str
    created_at: dt.datetime | None
    profile: EmployeeSummary | None = None


class MarkAttendanceResponse(BaseModel):
    outcome: Literal["marked", "already_marked"]
    message: str
    record: AttendanceRead | None = None


class TodayStatus(BaseModel):
    date: dt.date
    marked: bool
