"""Shared CRUD repository over one SQLAlchemy session, keyed by public uuid."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from pipeline_api.models.base import Base, new_public_id, utcnow
from pipeline_api.repositories.errors import (
    NoRowsAffectedError,
    NotFoundError,
    RepositoryError,
    classify_db_error,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    list / get / create / update / delete for one table.

    Reads return None when nothing matches; delete raises NotFoundError.
    Every store failure rolls the session back and is re-raised as a typed
    RepositoryError.
    """

    model: type[ModelT]
    entity_name = "Row"

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except RepositoryError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Error when %s", action)
            raise classify_db_error(e, action) from e

    def _read_query(self) -> Query[Any]:
        """Query used by list_all/get_by_uuid; subclasses override to denormalise."""
        return self.db.query(self.model)

    def list_all(self) -> list[Any]:
        with self._guard(f"querying all {self.model.__tablename__}"):
            return self._read_query().order_by(self.model.id).all()

    def get_by_uuid(self, uuid: str) -> Any | None:
        with self._guard(f"querying {self.model.__tablename__} by uuid"):
            return self._read_query().filter(self.model.uuid == uuid).first()

    def get_model(self, uuid: str) -> ModelT | None:
        """Plain ORM row (raw foreign keys) for a public id."""
        return self.db.query(self.model).filter(self.model.uuid == uuid).first()

    def create(self, values: dict[str, Any]) -> ModelT:
        with self._guard(f"inserting into {self.model.__tablename__}"):
            now = utcnow()
            row = self.model(**values, uuid=new_public_id(), created_at=now, updated_at=now)
            self.db.add(row)
            self.db.flush()
            if row.id is None:
                raise NoRowsAffectedError("No rows were affected")
            self.db.commit()
            self.db.refresh(row)
            logger.info("Created %s %s", self.entity_name, row.uuid)
            return row

    def update(self, uuid: str, values: dict[str, Any]) -> ModelT | None:
        with self._guard(f"updating {self.model.__tablename__}"):
            row = self.get_model(uuid)
            if row is None:
                return None
            for field, value in values.items():
                setattr(row, field, value)
            row.updated_at = utcnow()
            self.db.commit()
            self.db.refresh(row)
            return row

    def delete(self, uuid: str) -> None:
        with self._guard(f"deleting from {self.model.__tablename__}"):
            deleted = (
                self.db.query(self.model)
                .filter(self.model.uuid == uuid)
                .delete(synchronize_session=False)
            )
            if deleted == 0:
                raise NotFoundError(f"{self.entity_name} not found")
            self.db.commit()
            logger.info("Deleted %s %s", self.entity_name, uuid)
