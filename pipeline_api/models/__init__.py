"""SQLAlchemy ORM models."""

from pipeline_api.models.base import Base
from pipeline_api.models.change_request import ChangeRequest
from pipeline_api.models.end_user import EndUser
from pipeline_api.models.pipeline import Pipeline
from pipeline_api.models.project_category import ProjectCategory
from pipeline_api.models.user import Role, User

__all__ = ["Base", "ChangeRequest", "EndUser", "Pipeline", "ProjectCategory", "Role", "User"]
