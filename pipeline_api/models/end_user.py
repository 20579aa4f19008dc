"""ORM model for customer-side contacts referenced by pipelines."""

from sqlalchemy import Column, String

from pipeline_api.models.base import Base, TimestampedMixin


class EndUser(TimestampedMixin, Base):
    __tablename__ = "end_users"

    name = Column(String(255), nullable=False)
    address = Column(String(1024), nullable=False)
    pic_name = Column(String(255), nullable=False)
    phone_number = Column(String(64), nullable=False)
