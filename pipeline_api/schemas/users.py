"""Schemas for internal user accounts. Password hashes are never serialised."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from pipeline_api.models.user import Role
from pipeline_api.schemas.common import RequiredStr


class UserWrite(BaseModel):
    """Body for create and update; every field is required and re-validated on update."""

    name: RequiredStr = Field(..., max_length=255)
    email: RequiredStr = Field(..., max_length=255)
    role: Role
    birthdate: date
    password: RequiredStr = Field(..., max_length=128)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    name: str
    email: str
    role: str
    birthdate: date
    created_at: datetime | None = None
    updated_at: datetime | None = None
