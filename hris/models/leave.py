"""
Leave model — time-off requests and their approval status.
"""

from __future__ import annotations

import enum
from datetime import date, datetime, timezone

from sqlalchemy import (CheckConstraint, Column, Date, DateTime, ForeignKey,
                        Index, Integer, String, Text)
from sqlalchemy.orm import relationship

from hris.db.base import Base


class LeaveType(str, enum.Enum):
    SICK = "sick"
    VACATION = "vacation"
    PERSONAL = "personal"
    OTHER = "other"


class LeaveStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Leave(Base):
    __tablename__ = "leaves"
    __table_args__ = (
        CheckConstraint(
            "leave_type IN ('sick', 'vacation', 'personal', 'other')",
            name="ck_leaves_type",
        ),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_leaves_status",
        ),
        Index("ix_leaves_employee_created", "employee_id", "created_at"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_id: int = Column(  # type: ignore[assignment]
        Integer,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    leave_type: str = Column(String(20), nullable=False)  # type: ignore[assignment]
    start_date: date = Column(Date, nullable=False)  # type: ignore[assignment]
    end_date: date = Column(Date, nullable=False)  # type: ignore[assignment]
    reason: str = Column(Text, nullable=False)  # type: ignore[assignment]
    status: str = Column(  # type: ignore[assignment]
        String(20),
        nullable=False,
        default=LeaveStatus.PENDING.value,
        server_default=LeaveStatus.PENDING.value,
    )
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    profile = relationship("Profile", back_populates="leaves")
