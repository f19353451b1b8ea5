"""Pydantic schemas for the employee directory."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, field_validator

from hris.schemas.user import check_name, check_password, normalise_email


def check_position(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Position must not be empty")
    return v


class EmployeeCreate(BaseModel):
    email: str
    password: str
    name: str
    position: str
    date_of_joining: date

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

    @field_validator("position")
    @classmethod
    def _position(cls, v: str) -> str:
        return check_position(v)


class EmployeeUpdate(BaseModel):
    name: str | None = None
    position: str | None = None
    date_of_joining: date | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Name may be omitted but not set to null")
        return check_name(v)

    @field_validator("date_of_joining")
    @classmethod
    def _date_of_joining(cls, v: date | None) -> date:
        if v is None:
            raise ValueError("Date of joining may be omitted but not set to null")
        return v

    @field_validator("position")
    @classmethod
    def _position(cls, v: str | None) -> str | None:
        return None if v is None else check_position(v)


class EmployeeRead(BaseModel):
    id: int
    email: str
    name: str
    position: str | None
    date_of_joining: date
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class EmployeeSummary(BaseModel):
    """Name/email of the profile that owns a leave or attendance row."""

    name: str | None = None
    email: str | None = None


class DeleteResponse(BaseModel):
    success: bool
    message: str
