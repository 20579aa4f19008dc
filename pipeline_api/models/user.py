"""ORM model for internal user accounts (sales, PIC, admins)."""

import enum

from sqlalchemy import Column, Date, String

from pipeline_api.models.base import Base, TimestampedMixin


class Role(str, enum.Enum):
    """Roles the API distinguishes. Only ADMIN may approve change requests."""

    ADMIN = "admin"
    STANDARD = "user"

    @classmethod
    def from_stored(cls, value: object) -> "Role":
        """Map a stored role string to a Role; anything but "admin" is STANDARD."""
        if isinstance(value, cls):
            return value
        return cls.ADMIN if value == cls.ADMIN.value else cls.STANDARD


class User(TimestampedMixin, Base):
    """
    User account for JWT authentication and the admin gate.

    password holds a bcrypt hash, never the plain text.
    """

    __tablename__ = "pipeline_users"

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(String(32), nullable=False, default=Role.STANDARD.value)
    birthdate = Column(Date, nullable=False)
    password = Column(String(255), nullable=False)
