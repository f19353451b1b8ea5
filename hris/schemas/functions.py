"""Pydantic schemas for privileged functions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DeleteUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
