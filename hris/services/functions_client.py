"""
HTTP client for privileged remote functions.

Only the ``delete-user`` function may remove an auth identity, so the
directory calls it with the admin's own bearer token rather than
deleting rows itself.
"""

from __future__ import annotations

import logging

import httpx

from hris.core.config import settings
from hris.core.exceptions import PrivilegedFunctionError

logger = logging.getLogger(__name__)

DELETE_USER_PATH = "/delete-user"


class FunctionsClient:
    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=(base_url or settings.FUNCTIONS_BASE_URL).rstrip("/") + settings.FUNCTIONS_PREFIX,
            transport=transport,
            timeout=timeout if timeout is not None else settings.FUNCTIONS_TIMEOUT_SECONDS,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "FunctionsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def delete_user(self, access_token: str, user_id: int) -> dict:
        """Invoke ``delete-user``; non-2xx answers raise with the function's own message."""
        try:
            response = await self._client.post(
                DELETE_USER_PATH,
                json={"userId": user_id},
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logger.error("delete-user function unreachable: %s", e)
            raise PrivilegedFunctionError("Failed to delete employee") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.is_success:
            message = body.get("error") if isinstance(body, dict) else None
            logger.warning(
                "delete-user function refused user %d: %s %s",
                user_id,
                response.status_code,
                message,
            )
            raise PrivilegedFunctionError(
                message or "Failed to delete employee",
                status_code=response.status_code,
            )
        return body
