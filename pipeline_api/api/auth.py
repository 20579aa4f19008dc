"""Login endpoint. The only route reachable without a token besides health."""

import logging

from fastapi import APIRouter

from pipeline_api.api.deps import AppSettings, DbSession
from pipeline_api.api.responses import ApiError
from pipeline_api.repositories.errors import RepositoryError
from pipeline_api.schemas.auth import LoginRequest, TokenResponse
from pipeline_api.schemas.common import Envelope
from pipeline_api.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=Envelope[TokenResponse])
def login(body: LoginRequest, db: DbSession, settings: AppSettings) -> Envelope[TokenResponse]:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>

    Unknown email and wrong password both answer 404 "Invalid email or password".
    """
    try:
        token = auth_service.login(db, settings, body.email, body.password)
    except RepositoryError as e:
        raise ApiError(500, "Failed to authenticate user", payload=None) from e
    if token is None:
        raise ApiError(404, "Invalid email or password", payload=None)
    return Envelope(
        status_code=200,
        message="Authentication success",
        payload=TokenResponse(token=token),
    )
