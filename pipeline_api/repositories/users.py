"""Internal user repository. Stores bcrypt hashes in the password column."""

from pipeline_api.models import User
from pipeline_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User
    entity_name = "User"

    def get_by_email(self, email: str) -> User | None:
        with self._guard("querying pipeline_users by email"):
            return self.db.query(User).filter(User.email == email).first()

    def id_for_uuid(self, uuid: str) -> int | None:
        """Internal id for a public user id, or None if the account is gone."""
        with self._guard("resolving pipeline_users uuid"):
            return self.db.query(User.id).filter(User.uuid == uuid).scalar()
