"""Pydantic schemas for signup and the identity context."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, field_validator

from hris.core.config import settings


def normalise_email(v: str) -> str:
    v = v.strip().lower()
    local, _, domain = v.partition("@")
    if not local or "." not in domain:
        raise ValueError("Invalid email address")
    return v


def check_password(v: str) -> str:
    if len(v) < settings.MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
        )
    return v


def check_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Name must not be empty")
    if len(v) > 200:
        raise ValueError("Name must not exceed 200 characters")
    return v


class SignupRequest(BaseModel):
    email: str
    password: str
    name: str
    position: str | None = None

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalise_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        return check_password(v)

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return check_name(v)


class IdentityRead(BaseModel):
    id: int
    email: str
    name: str | None
    position: str | None = None
    date_of_joining: date | None = None
    role: str
    is_admin: bool
