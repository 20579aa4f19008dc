"""Internal user endpoints. Passwords are strength-checked and re-hashed on every write."""

from typing import Any

from fastapi import APIRouter, status

from pipeline_api.api.deps import DbSession
from pipeline_api.api.responses import ApiError, repository_http_error
from pipeline_api.core.security import hash_password
from pipeline_api.core.validation import CredentialError, validate_email, validate_password
from pipeline_api.repositories.errors import RepositoryError
from pipeline_api.repositories.users import UserRepository
from pipeline_api.schemas.common import Envelope
from pipeline_api.schemas.users import UserRead, UserWrite

router = APIRouter()

NOT_FOUND = "User not found"


def _validated_values(body: UserWrite) -> dict[str, Any]:
    """Run credential checks and return column values with the password hashed."""
    try:
        validate_password(body.password)
    except CredentialError as e:
        raise ApiError(400, e.message, payload="Password error")
    try:
        email = validate_email(body.email)
    except CredentialError as e:
        raise ApiError(400, e.message, payload="Email error")
    return {
        "name": body.name,
        "email": email,
        "role": body.role.value,
        "birthdate": body.birthdate,
        "password": hash_password(body.password.strip()),
    }


@router.get("", response_model=Envelope[list[UserRead]])
def list_users(db: DbSession) -> Envelope[list[UserRead]]:
    try:
        users = UserRepository(db).list_all()
    except RepositoryError as e:
        raise repository_http_error(e, "retrieving", NOT_FOUND) from e
    return Envelope(
        status_code=200,
        message="Get data all users",
        payload=[UserRead.model_validate(u) for u in users],
    )


@router.get("/{uuid}", response_model=Envelope[UserRead])
def get_user(uuid: str, db: DbSession) -> Envelope[UserRead]:
    try:
        user = UserRepository(db).get_by_uuid(uuid)
    except RepositoryError as e:
        raise repository_http_error(e, "retrieving", NOT_FOUND) from e
    if user is None:
        raise ApiError(404, NOT_FOUND, payload=None)
    return Envelope(status_code=200, message="Get user by ID", payload=UserRead.model_validate(user))


@router.post("", response_model=Envelope[UserRead], status_code=status.HTTP_201_CREATED)
def create_user(body: UserWrite, db: DbSession) -> Envelope[UserRead]:
    values = _validated_values(body)
    try:
        user = UserRepository(db).create(values)
    except RepositoryError as e:
        raise repository_http_error(e, "creating", NOT_FOUND) from e
    return Envelope(status_code=201, message="User created", payload=UserRead.model_validate(user))


@router.put("/{uuid}", response_model=Envelope[UserRead])
def update_user(uuid: str, body: UserWrite, db: DbSession) -> Envelope[UserRead]:
    values = _validated_values(body)
    try:
        user = UserRepository(db).update(uuid, values)
    except RepositoryError as e:
        raise repository_http_error(e, "updating", NOT_FOUND) from e
    if user is None:
        raise ApiError(404, f"User {uuid} not found", payload="Data not found")
    return Envelope(status_code=200, message=f"User {uuid} updated", payload=UserRead.model_validate(user))


@router.delete("/{uuid}", response_model=Envelope[str])
def delete_user(uuid: str, db: DbSession) -> Envelope[str]:
    try:
        UserRepository(db).delete(uuid)
    except RepositoryError as e:
        raise repository_http_error(e, "deleting", NOT_FOUND) from e
    return Envelope(status_code=200, message=f"User {uuid} removed", payload="Data deleted")
