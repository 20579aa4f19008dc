"""ORM model for project categories."""

from sqlalchemy import Column, String

from pipeline_api.models.base import Base, TimestampedMixin


class ProjectCategory(TimestampedMixin, Base):
    __tablename__ = "project_categories"

    name = Column(String(255), nullable=False)
