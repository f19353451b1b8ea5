"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from hris.api.v1.endpoints import attendance, auth, dashboard, employees, leaves

api_router = APIRouter()

# Signup, login, refresh, logout, identity
api_router.include_router(auth.router)

# Leave workflow
api_router.include_router(leaves.router)

# Daily attendance
api_router.include_router(attendance.router)

# Employee directory (admin)
api_router.include_router(employees.router)

# Dashboard, health
api_router.include_router(dashboard.router)
