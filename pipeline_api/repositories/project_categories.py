"""Project category repository."""

from pipeline_api.models import ProjectCategory
from pipeline_api.repositories.base import BaseRepository


class ProjectCategoryRepository(BaseRepository[ProjectCategory]):
    model = ProjectCategory
    entity_name = "Categories"
