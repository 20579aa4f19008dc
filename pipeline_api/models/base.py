"""SQLAlchemy declarative Base and shared model configuration."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, MetaData, String, func
from sqlalchemy.orm import DeclarativeBase

# All tables live in one Postgres schema. Tests translate it away for SQLite.
SCHEMA = "pipeline"


def new_public_id() -> str:
    """Random, non-sequential identifier used in every external reference."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    metadata = MetaData(schema=SCHEMA)


class TimestampedMixin:
    """Internal id, public uuid and created/updated timestamps shared by every table."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(String(36), nullable=False, unique=True, index=True, default=new_public_id)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
