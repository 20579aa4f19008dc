"""Schemas for project categories."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pipeline_api.schemas.common import RequiredStr


class ProjectCategoryWrite(BaseModel):
    name: RequiredStr = Field(..., max_length=255)


class ProjectCategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
