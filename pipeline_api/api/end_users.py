"""End user endpoints."""

from fastapi import APIRouter, status

from pipeline_api.api.deps import DbSession
from pipeline_api.api.responses import ApiError, repository_http_error
from pipeline_api.repositories.end_users import EndUserRepository
from pipeline_api.repositories.errors import RepositoryError
from pipeline_api.schemas.common import Envelope
from pipeline_api.schemas.end_users import EndUserRead, EndUserWrite

router = APIRouter()

NOT_FOUND = "End user not found"


@router.get("", response_model=Envelope[list[EndUserRead]])
def list_end_users(db: DbSession) -> Envelope[list[EndUserRead]]:
    try:
        rows = EndUserRepository(db).list_all()
    except RepositoryError as e:
        raise repository_http_error(e, "retrieving", NOT_FOUND) from e
    return Envelope(
        status_code=200,
        message="Get data all end users",
        payload=[EndUserRead.model_validate(row) for row in rows],
    )


@router.get("/{uuid}", response_model=Envelope[EndUserRead])
def get_end_user(uuid: str, db: DbSession) -> Envelope[EndUserRead]:
    try:
        row = EndUserRepository(db).get_by_uuid(uuid)
    except RepositoryError as e:
        raise repository_http_error(e, "retrieving", NOT_FOUND) from e
    if row is None:
        raise ApiError(404, NOT_FOUND, payload=None)
    return Envelope(status_code=200, message="Get end user by ID", payload=EndUserRead.model_validate(row))


@router.post("", response_model=Envelope[EndUserRead], status_code=status.HTTP_201_CREATED)
def create_end_user(body: EndUserWrite, db: DbSession) -> Envelope[EndUserRead]:
    try:
        row = EndUserRepository(db).create(body.model_dump())
    except RepositoryError as e:
        raise repository_http_error(e, "creating", NOT_FOUND) from e
    return Envelope(status_code=201, message="End user created", payload=EndUserRead.model_validate(row))


@router.put("/{uuid}", response_model=Envelope[EndUserRead])
def update_end_user(uuid: str, body: EndUserWrite, db: DbSession) -> Envelope[EndUserRead]:
    try:
        row = EndUserRepository(db).update(uuid, body.model_dump())
    except RepositoryError as e:
        raise repository_http_error(e, "updating", NOT_FOUND) from e
    if row is None:
        raise ApiError(404, f"End User {uuid} not found", payload="Data not found")
    return Envelope(
        status_code=200,
        message=f"End User {uuid} updated",
        payload=EndUserRead.model_validate(row),
    )


@router.delete("/{uuid}", response_model=Envelope[str])
def delete_end_user(uuid: str, db: DbSession) -> Envelope[str]:
    try:
        EndUserRepository(db).delete(uuid)
    except RepositoryError as e:
        raise repository_http_error(e, "deleting", NOT_FOUND) from e
    return Envelope(status_code=200, message=f"End User {uuid} removed", payload="Data deleted")
