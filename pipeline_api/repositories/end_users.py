"""End user (customer contact) repository."""

from pipeline_api.models import EndUser
from pipeline_api.repositories.base import BaseRepository


class EndUserRepository(BaseRepository[EndUser]):
    model = EndUser
    entity_name = "End user"
