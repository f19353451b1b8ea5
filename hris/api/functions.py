"""
Privileged functions, served outside the versioned API.

``delete-user`` is the only path with authority to remove an auth
identity. It checks the caller's bearer token itself and answers errors
as ``{"error": ...}`` rather than the API's ``{"detail": ...}`` shape.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from hris.api.v1.deps import get_db, load_user_for_token
from hris.core.exceptions import NotFoundError
from hris.models.user import Role
from hris.schemas.functions import DeleteUserRequest
from hris.services import provisioning

router = APIRouter(tags=["functions"])
logger = logging.getLogger(__name__)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _bearer(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@router.post("/delete-user")
async def delete_user(request: Request, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    token = _bearer(request)
    if token is None:
        return _error("Missing authorization header", 401)

    caller = await load_user_for_token(db, token)
    if caller is None:
        return _error("Unauthorized", 401)
    if caller.role != Role.ADMIN:
        logger.warning("User %d attempted delete-user without admin role", caller.id)
        return _error("Only admins can delete users", 403)

    try:
        body = DeleteUserRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        return _error("userId is required", 400)

    if body.user_id == caller.id:
        return _error("Cannot delete your own account", 400)

    try:
        await provisioning.delete_identity(db, body.user_id)
    except NotFoundError as e:
        return _error(e.message, 404)

    logger.info("Admin %d deleted user %d", caller.id, body.user_id)
    return JSONResponse(status_code=200, content={"success": True})
