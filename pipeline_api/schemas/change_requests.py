"""Schemas for change requests (proposed pipeline status changes)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from pipeline_api.schemas.common import RequiredStr


class ChangeRequestCreate(BaseModel):
    """Requester and request_status are set by the server, not the body."""

    id_pipeline: PositiveInt
    id_end_user: PositiveInt
    new_status: RequiredStr = Field(..., max_length=64)
    note: str | None = None


class ChangeRequestRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    id_pipeline: int
    id_end_user: int
    new_status: str
    note: str | None = None
    request_status: str
    id_user_request: int | None = None
    id_user_approval: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ChangeRequestDetail(BaseModel):
    """Change request with pipeline, end-user, requester and approver names joined in."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    project_name: str | None = None
    end_user: str | None = None
    user_request: str | None = None
    user_approve: str | None = None
    current_status: str | None = None
    new_status: str
    note: str | None = None
    request_status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
