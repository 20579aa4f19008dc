"""Typed repository failures. Controllers switch on these to pick an HTTP status."""

import enum

from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    TRANSIENT_FAILURE = "transient_failure"


class RepositoryError(Exception):
    """Base class for store failures surfaced by repositories."""

    kind: ErrorKind = ErrorKind.TRANSIENT_FAILURE

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class NotFoundError(RepositoryError):
    """No row matched the public identifier (update/delete affected zero rows)."""

    kind = ErrorKind.NOT_FOUND


class ConstraintViolationError(RepositoryError):
    """The store rejected the write: unique, foreign key or not-null constraint."""

    kind = ErrorKind.CONSTRAINT_VIOLATION


class TransientFailureError(RepositoryError):
    """Connection, timeout or other unexpected store failure."""

    kind = ErrorKind.TRANSIENT_FAILURE


class NoRowsAffectedError(TransientFailureError):
    """An insert or update that must touch a row touched none."""


def classify_db_error(exc: SQLAlchemyError, action: str) -> RepositoryError:
    """Map a SQLAlchemy exception to the matching typed repository error."""
    if isinstance(exc, IntegrityError):
        return ConstraintViolationError(f"Constraint violated while {action}", cause=exc)
    return TransientFailureError(f"Database error while {action}", cause=exc)
