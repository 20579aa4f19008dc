"""Pydantic request/response schemas."""

from pipeline_api.schemas.auth import CurrentUser, LoginRequest, TokenResponse
from pipeline_api.schemas.change_requests import (
    ChangeRequestCreate,
    ChangeRequestDetail,
    ChangeRequestRecord,
)
from pipeline_api.schemas.common import Envelope
from pipeline_api.schemas.end_users import EndUserRead, EndUserWrite
from pipeline_api.schemas.health import HealthResponse
from pipeline_api.schemas.pipelines import PipelineDetail, PipelineRecord, PipelineWrite
from pipeline_api.schemas.project_categories import ProjectCategoryRead, ProjectCategoryWrite
from pipeline_api.schemas.users import UserRead, UserWrite

__all__ = [
    "ChangeRequestCreate",
    "ChangeRequestDetail",
    "ChangeRequestRecord",
    "CurrentUser",
    "EndUserRead",
    "EndUserWrite",
    "Envelope",
    "HealthResponse",
    "LoginRequest",
    "PipelineDetail",
    "PipelineRecord",
    "PipelineWrite",
    "ProjectCategoryRead",
    "ProjectCategoryWrite",
    "TokenResponse",
    "UserRead",
    "UserWrite",
]
