"""
Employee directory endpoints (admin only).

Deleting an employee goes through the privileged ``delete-user``
function, which removes both the login and the profile.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hris.api.v1.deps import (get_access_token, get_db, get_functions_client,
                              require_admin)
from hris.core.access import Identity
from hris.models.profile import Profile
from hris.schemas.profile import (DeleteResponse, EmployeeCreate, EmployeeRead,
                                  EmployeeUpdate)
from hris.services import directory
from hris.services.functions_client import FunctionsClient

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeRead])
async def list_employees(
    db: AsyncSession = Depends(get_db),
    _admin: Identity = Depends(require_admin),
) -> list[Profile]:
    return await directory.list_employees(db)


@router.post("", response_model=EmployeeRead, status_code=201)
async def create_employee(
    body: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
    _admin: Identity = Depends(require_admin),
) -> Profile:
    """Create a login for a new employee together with their profile."""
    return await directory.create_employee(db, body)


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
    _admin: Identity = Depends(require_admin),
) -> Profile:
    return await directory.get_employee(db, employee_id)


@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: int,
    body: EmployeeUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: Identity = Depends(require_admin),
) -> Profile:
    return await directory.update_employee(db, employee_id, body)


@router.delete("/{employee_id}", response_model=DeleteResponse)
async def delete_employee(
    employee_id: int,
    token: str = Depends(get_access_token),
    client: FunctionsClient = Depends(get_functions_client),
    _admin: Identity = Depends(require_admin),
) -> DeleteResponse:
    await directory.delete_employee(client, token, employee_id)
    return DeleteResponse(success=True, message="Employee deleted successfully")
