"""Login: verify email/password against stored hashes and issue access tokens."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from pipeline_api.core.security import create_access_token, verify_password
from pipeline_api.models import User
from pipeline_api.repositories.users import UserRepository

if TYPE_CHECKING:
    from pipeline_api.core.config import Settings

logger = logging.getLogger(__name__)


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Return the user when email exists and password matches its hash, else None."""
    user = UserRepository(db).get_by_email(email.strip())
    if user is None:
        logger.info("Login failed: unknown email")
        return None
    if not verify_password(password, user.password):
        logger.info("Login failed: wrong password for user %s", user.uuid)
        return None
    return user


def issue_token(user: User, settings: "Settings") -> str:
    """Sign a token whose id claim is the user's public uuid."""
    return create_access_token(
        {"id": user.uuid, "email": user.email, "name": user.name, "role": user.role},
        settings,
    )


def login(db: Session, settings: "Settings", email: str, password: str) -> str | None:
    """Token for valid credentials, None when the email is unknown or the password wrong."""
    user = authenticate_user(db, email, password)
    if user is None:
        return None
    return issue_token(user, settings)
