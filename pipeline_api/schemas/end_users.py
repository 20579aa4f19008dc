"""Schemas for end users (customer contacts)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pipeline_api.schemas.common import RequiredStr


class EndUserWrite(BaseModel):
    name: RequiredStr = Field(..., max_length=255)
    address: RequiredStr = Field(..., max_length=1024)
    pic_name: RequiredStr = Field(..., max_length=255)
    phone_number: RequiredStr = Field(..., max_length=64)


class EndUserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    name: str
    address: str
    pic_name: str
    phone_number: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
