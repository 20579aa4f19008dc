"""Data access: one repository per table."""

from pipeline_api.repositories.change_requests import ChangeRequestRepository
from pipeline_api.repositories.end_users import EndUserRepository
from pipeline_api.repositories.errors import (
    ConstraintViolationError,
    ErrorKind,
    NoRowsAffectedError,
    NotFoundError,
    RepositoryError,
    TransientFailureError,
)
from pipeline_api.repositories.pipelines import PipelineRepository
from pipeline_api.repositories.project_categories import ProjectCategoryRepository
from pipeline_api.repositories.users import UserRepository

__all__ = [
    "ChangeRequestRepository",
    "ConstraintViolationError",
    "EndUserRepository",
    "ErrorKind",
    "NoRowsAffectedError",
    "NotFoundError",
    "PipelineRepository",
    "ProjectCategoryRepository",
    "RepositoryError",
    "TransientFailureError",
    "UserRepository",
]
