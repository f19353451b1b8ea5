"""
Attendance model — one presence marker per employee per day.
"""

from __future__ import annotations

import enum
from datetime import date, datetime, timezone

from sqlalchemy import (CheckConstraint, Column, Date, DateTime, ForeignKey,
                        Integer, String, UniqueConstraint)
from sqlalchemy.orm import relationship

from hris.db.base import Base


class AttendanceStatus(str, enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_attendance_emp_date"),
        CheckConstraint("status IN ('present', 'absent')", name="ck_attendance_status"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_id: int = Column(  # type: ignore[assignment]
        Integer,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    date: date = Column(Date, nullable=False, index=True)  # type: ignore[assignment]
    status: str = Column(String(10), nullable=False)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    profile = relationship("Profile", back_populates="attendance")
