"""
Leave endpoints.

- Any authenticated user can apply for leave and list what they may see.
- Only admins can approve or reject.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hris.api.v1.deps import get_db, get_identity
from hris.core.access import Identity
from hris.schemas.leave import LeaveCreate, LeaveRead, LeaveStatusUpdate
from hris.services import leaves as leave_service

router = APIRouter(prefix="/leaves", tags=["leaves"])


@router.get("", response_model=list[LeaveRead])
async def list_leaves(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> list[LeaveRead]:
    return await leave_service.list_leaves(db, identity)


@router.post("", response_model=LeaveRead, status_code=201)
async def submit_leave(
    body: LeaveCreate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> LeaveRead:
    """Apply for leave. The request starts out pending."""
    return await leave_service.submit_leave(db, identity, body)


@router.get("/{leave_id}", response_model=LeaveRead)
async def get_leave(
    leave_id: int,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> LeaveRead:
    return await leave_service.get_leave(db, identity, leave_id)


@router.patch("/{leave_id}/status", response_model=LeaveRead)
async def set_leave_status(
    leave_id: int,
    body: LeaveStatusUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> LeaveRead:
    """Approve or reject a pending leave request (admin only)."""
    return await leave_service.set_leave_status(db, identity, leave_id, body.status)
