"""Tests for the privileged delete-user function."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hris.models.attendance import Attendance
from hris.models.leave import Leave
from hris.models.profile import Profile
from hris.models.user import User

URL = "/functions/v1/delete-user"


@pytest.mark.asyncio
async def test_delete_user_removes_login_and_profile(
    async_client: AsyncClient, db_session: AsyncSession, admin, employee
):
    _, admin_headers = admin
    emma_id, emma_headers = employee
    await async_client.post("/api/v1/attendance", json={"status": "present"}, headers=emma_headers)
    await async_client.post(
        "/api/v1/leaves",
        json={"leave_type": "sick", "start_date": "2026-10-20", "end_date": "2026-10-21", "reason": "flu"},
        headers=emma_headers,
    )

    resp = await async_client.post(URL, json={"userId": emma_id}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    for model in (User, Profile):
        assert await db_session.scalar(select(func.count(model.id)).where(model.id == emma_id)) == 0
    for model in (Leave, Attendance):
        assert await db_session.scalar(
            select(func.count(model.id)).where(model.employee_id == emma_id)
        ) == 0

    listed = await async_client.get("/api/v1/employees", headers=admin_headers)
    assert emma_id not in [e["id"] for e in listed.json()]

    # The deleted login no longer authenticates
    me = await async_client.get("/api/v1/auth/me", headers=emma_headers)
    assert me.status_code == 401


@pytest.mark.asyncio
async def test_delete_user_requires_bearer(async_client: AsyncClient, employee):
    emma_id, _ = employee
    resp = await async_client.post(URL, json={"userId": emma_id})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Missing authorization header"}

    resp = await async_client.post(
        URL, json={"userId": emma_id}, headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}


@pytest.mark.asyncio
async def test_delete_user_requires_admin(async_client: AsyncClient, employee, other_employee):
    _, emma_headers = employee
    oscar_id, _ = other_employee
    resp = await async_client.post(URL, json={"userId": oscar_id}, headers=emma_headers)
    assert resp.status_code == 403
    assert resp.json() == {"error": "Only admins can delete users"}


@pytest.mark.asyncio
async def test_delete_user_validates_body(async_client: AsyncClient, admin):
    admin_id, admin_headers = admin
    resp = await async_client.post(URL, json={}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "userId is required"}

    resp = await async_client.post(URL, json={"userId": admin_id}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Cannot delete your own account"}


@pytest.mark.asyncio
async def test_delete_unknown_user(async_client: AsyncClient, admin):
    _, admin_headers = admin
    resp = await async_client.post(URL, json={"userId": 9999}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}
