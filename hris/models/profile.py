"""
Profile model — one directory entry per user, sharing the user's id.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from hris.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id: int = Column(  # type: ignore[assignment]
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    email: str = Column(String(320), nullable=False, index=True)  # type: ignore[assignment]
    name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    position: str | None = Column(String(100), nullable=True)  # type: ignore[assignment]
    date_of_joining: date = Column(  # type: ignore[assignment]
        Date,
        nullable=False,
        default=lambda: datetime.now(timezone.utc).date(),
        index=True,
    )
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User", back_populates="profile")
    leaves = relationship(
        "Leave",
        back_populates="profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    attendance = relationship(
        "Attendance",
        back_populates="profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
