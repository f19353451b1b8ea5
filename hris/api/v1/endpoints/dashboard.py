"""
Dashboard and health endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hris.api.v1.deps import get_db, get_identity
from hris.core.access import Identity
from hris.schemas.dashboard import DashboardStats, HealthResponse
from hris.services.dashboard import compute_stats

router = APIRouter(tags=["dashboard"])
logger = logging.getLogger(__name__)


@router.get("/dashboard", response_model=DashboardStats)
async def dashboard(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> DashboardStats:
    """Counts of employees, leaves by status and today's attendance for the caller's role."""
    return await compute_stats(db, identity)


@router.get("/health", response_model=HealthResponse)
async def health(db: AsyncSession = Depends(get_db)) -> HealthResponse:
    """Public health check — database connectivity."""
    try:
        await db.execute(select(1))
    except SQLAlchemyError as e:
        logger.error("Health check DB failure: %s", e)
        return HealthResponse(db=False)
    return HealthResponse(db=True)
