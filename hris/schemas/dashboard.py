"""Pydantic schemas for the dashboard."""

from __future__ import annotations

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_employees: int = 0
    pending_leaves: int = 0
    approved_leaves: int = 0
    rejected_leaves: int = 0
    present_today: int = 0
    absent_today: int = 0


class HealthResponse(BaseModel):
    db: bool
