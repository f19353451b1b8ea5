"""
Identity context and the authorization predicates applied before every
read or write.

Role visibility is a query-time concern: an admin sees every row, an
employee only rows whose ``employee_id`` is their own user id.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from sqlalchemy import Select
from sqlalchemy.orm import InstrumentedAttribute

from hris.core.exceptions import PermissionDeniedError
from hris.models.user import Role

S = TypeVar("S", bound=Select)


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str
    name: str | None
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def scope_to_identity(stmt: S, owner_column: InstrumentedAttribute, identity: Identity) -> S:
    """Restrict *stmt* to rows owned by *identity* unless the caller is an admin."""
    if identity.is_admin:
        return stmt
    return stmt.where(owner_column == identity.user_id)


def ensure_admin(identity: Identity, message: str | None = None) -> None:
    if not identity.is_admin:
        if message:
            raise PermissionDeniedError(message)
        raise PermissionDeniedError()


def ensure_owner_or_admin(identity: Identity, employee_id: int) -> None:
    if not identity.is_admin and employee_id != identity.user_id:
        raise PermissionDeniedError("You can only access your own records")
