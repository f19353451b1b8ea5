"""Tests for the admin-only employee directory."""

import json

import httpx
import pytest
from httpx import AsyncClient

from hris.api.v1.deps import get_functions_client
from hris.main import app
from hris.services.functions_client import FunctionsClient

NEW_EMPLOYEE = {
    "email": "bob@example.com",
    "password": "welcome1",
    "name": "Bob Jones",
    "position": "Developer",
    "date_of_joining": "2024-03-01",
}


def _use_function_transport(handler) -> list[httpx.Request]:
    """Route the privileged function client through *handler*; return the captured requests."""
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    async def _override():
        async with FunctionsClient(
            base_url="http://functions.test", transport=httpx.MockTransport(_record)
        ) as client:
            yield client

    app.dependency_overrides[get_functions_client] = _override
    return seen


@pytest.fixture(autouse=True)
def _reset_function_override():
    yield
    app.dependency_overrides.pop(get_functions_client, None)


@pytest.mark.asyncio
async def test_create_employee_sets_join_date(async_client: AsyncClient, admin):
    """POST /employees should provision the login and set date_of_joining at once."""
    _, headers = admin
    resp = await async_client.post("/api/v1/employees", json=NEW_EMPLOYEE, headers=headers)
    assert resp.status_code == 201
    data = resp.json()
    assert data["email"] == "bob@example.com"
    assert data["name"] == "Bob Jones"
    assert data["position"] == "Developer"
    assert data["date_of_joining"] == "2024-03-01"

    login = await async_client.post(
        "/api/v1/auth/login", data={"username": "bob@example.com", "password": "welcome1"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_create_duplicate_email_rejected(async_client: AsyncClient, admin):
    _, headers = admin
    await async_client.post("/api/v1/employees", json=NEW_EMPLOYEE, headers=headers)
    resp = await async_client.post("/api/v1/employees", json=NEW_EMPLOYEE, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already registered"


@pytest.mark.asyncio
async def test_list_employees_by_join_date(async_client: AsyncClient, admin):
    _, headers = admin
    for i, joined in enumerate(["2021-06-01", "2023-01-15", "2022-09-30"]):
        await async_client.post(
            "/api/v1/employees",
            json={**NEW_EMPLOYEE, "email": f"e{i}@example.com", "date_of_joining": joined},
            headers=headers,
        )

    resp = await async_client.get("/api/v1/employees", headers=headers)
    assert resp.status_code == 200
    joined = [e["date_of_joining"] for e in resp.json() if e["email"].startswith("e")]
    assert joined == ["2023-01-15", "2022-09-30", "2021-06-01"]


@pytest.mark.asyncio
async def test_non_admin_is_turned_away(async_client: AsyncClient, employee):
    _, headers = employee
    for method, url in [
        ("GET", "/api/v1/employees"),
        ("POST", "/api/v1/employees"),
        ("PUT", "/api/v1/employees/1"),
        ("DELETE", "/api/v1/employees/1"),
    ]:
        kwargs = {"json": NEW_EMPLOYEE} if method == "POST" else {}
        if method == "PUT":
            kwargs = {"json": {"name": "Hacker"}}
        resp = await async_client.request(method, url, headers=headers, **kwargs)
        assert resp.status_code == 403, (method, url)
        assert resp.json()["detail"] == "You do not have permission to access this page"


@pytest.mark.asyncio
async def test_get_employee_not_found(async_client: AsyncClient, admin):
    _, headers = admin
    resp = await async_client.get("/api/v1/employees/9999", headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_employee(async_client: AsyncClient, admin, employee):
    """PUT /employees/{id} should patch only the supplied columns."""
    _, headers = admin
    emma_id, _ = employee
    resp = await async_client.put(
        f"/api/v1/employees/{emma_id}",
        json={"position": "Team Lead", "date_of_joining": "2020-02-02"},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Emma Employee"
    assert data["position"] == "Team Lead"
    assert data["date_of_joining"] == "2020-02-02"


@pytest.mark.asyncio
async def test_update_rejects_blank_position(async_client: AsyncClient, admin, employee):
    _, headers = admin
    emma_id, _ = employee
    resp = await async_client.put(
        f"/api/v1/employees/{emma_id}", json={"position": "   "}, headers=headers
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_update_rejects_null_for_required_columns(async_client: AsyncClient, admin, employee):
    _, headers = admin
    emma_id, _ = employee
    for body in ({"name": None}, {"date_of_joining": None}):
        resp = await async_client.put(f"/api/v1/employees/{emma_id}", json=body, headers=headers)
        assert resp.status_code == 422, body

    resp = await async_client.get(f"/api/v1/employees/{emma_id}", headers=headers)
    assert resp.json()["name"] == "Emma Employee"


@pytest.mark.asyncio
async def test_update_can_clear_position(async_client: AsyncClient, admin, employee):
    _, headers = admin
    emma_id, _ = employee
    resp = await async_client.put(
        f"/api/v1/employees/{emma_id}", json={"position": None}, headers=headers
    )
    assert resp.status_code == 200
    assert resp.json()["position"] is None


@pytest.mark.asyncio
async def test_delete_goes_through_privileged_function(async_client: AsyncClient, admin, employee):
    _, headers = admin
    emma_id, _ = employee
    seen = _use_function_transport(lambda request: httpx.Response(200, json={"success": True}))

    resp = await async_client.delete(f"/api/v1/employees/{emma_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    assert len(seen) == 1
    call = seen[0]
    assert call.method == "POST"
    assert str(call.url) == "http://functions.test/functions/v1/delete-user"
    assert call.headers["Authorization"] == headers["Authorization"]
    assert json.loads(call.content) == {"userId": emma_id}


@pytest.mark.asyncio
async def test_delete_failure_is_passed_through_verbatim(async_client: AsyncClient, admin, employee):
    _, headers = admin
    emma_id, _ = employee
    _use_function_transport(
        lambda request: httpx.Response(403, json={"error": "Only admins can delete users"})
    )

    resp = await async_client.delete(f"/api/v1/employees/{emma_id}", headers=headers)
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Only admins can delete users"


@pytest.mark.asyncio
async def test_delete_unreachable_function(async_client: AsyncClient, admin, employee):
    _, headers = admin
    emma_id, _ = employee

    def _boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    _use_function_transport(_boom)
    resp = await async_client.delete(f"/api/v1/employees/{emma_id}", headers=headers)
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Failed to delete employee"
