"""Request-scoped dependencies: settings, DB session, token verifier and admin gate."""

from typing import Annotated

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from pipeline_api.api.responses import ApiError
from pipeline_api.core.config import Settings
from pipeline_api.core.database import get_db
from pipeline_api.core.security import decode_access_token
from pipeline_api.models.user import Role
from pipeline_api.schemas.auth import CurrentUser

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Settings the app was built with (see create_app)."""
    return request.app.state.settings


AppSettings = Annotated[Settings, Depends(get_settings)]
DbSession = Annotated[Session, Depends(get_db)]


def _unauthorized() -> ApiError:
    return ApiError(401, "Unauthorized", payload="Error", headers={"WWW-Authenticate": "Bearer"})


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: AppSettings,
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the identity it carries.

    403 when no token is sent, 401 when the signature, expiry or claims are bad.
    Any role other than admin is treated as a standard user.
    The user row is not re-read, so role changes apply from the next login.
    """
    if credentials is None:
        raise ApiError(403, "Access denied, no token provided", payload="Invalid token")
    try:
        payload = decode_access_token(credentials.credentials, settings)
    except jwt.PyJWTError:
        raise _unauthorized()
    try:
        return CurrentUser(
            id=str(payload["id"]),
            email=payload["email"],
            name=payload["name"],
            role=payload["role"],
        )
    except (KeyError, ValidationError):
        raise _unauthorized()


Identity = Annotated[CurrentUser, Depends(get_current_user)]


def require_admin(current_user: Identity) -> CurrentUser:
    """Dependency: require role admin (exact). Raises 403 for every other role."""
    if current_user.role is not Role.ADMIN:
        raise ApiError(403, "Forbidden", payload="Error")
    return current_user


AdminIdentity = Annotated[CurrentUser, Depends(require_admin)]
