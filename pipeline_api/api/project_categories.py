"""Project category endpoints."""

from fastapi import APIRouter, status

from pipeline_api.api.deps import DbSession
from pipeline_api.api.responses import ApiError, repository_http_error
from pipeline_api.repositories.errors import RepositoryError
from pipeline_api.repositories.project_categories import ProjectCategoryRepository
from pipeline_api.schemas.common import Envelope
from pipeline_api.schemas.project_categories import ProjectCategoryRead, ProjectCategoryWrite

router = APIRouter()

NOT_FOUND = "Categories not found"


@router.get("", response_model=Envelope[list[ProjectCategoryRead]])
def list_categories(db: DbSession) -> Envelope[list[ProjectCategoryRead]]:
    try:
        rows = ProjectCategoryRepository(db).list_all()
    except RepositoryError as e:
        raise repository_http_error(e, "retrieving", NOT_FOUND) from e
    return Envelope(
        status_code=200,
        message="Get all categories data",
        payload=[ProjectCategoryRead.model_validate(row) for row in rows],
    )


@router.get("/{uuid}", response_model=Envelope[ProjectCategoryRead])
def get_category(uuid: str, db: DbSession) -> Envelope[ProjectCategoryRead]:
    try:
        row = ProjectCategoryRepository(db).get_by_uuid(uuid)
    except RepositoryError as e:
        raise repository_http_error(e, "retrieving", NOT_FOUND) from e
    if row is None:
        raise ApiError(404, NOT_FOUND, payload=None)
    return Envelope(
        status_code=200,
        message="Get categories by ID",
        payload=ProjectCategoryRead.model_validate(row),
    )


@router.post("", response_model=Envelope[ProjectCategoryRead], status_code=status.HTTP_201_CREATED)
def create_category(body: ProjectCategoryWrite, db: DbSession) -> Envelope[ProjectCategoryRead]:
    try:
        row = ProjectCategoryRepository(db).create(body.model_dump())
    except RepositoryError as e:
        raise repository_http_error(e, "creating", NOT_FOUND) from e
    return Envelope(
        status_code=201,
        message="Categories created",
        payload=ProjectCategoryRead.model_validate(row),
    )


@router.put("/{uuid}", response_model=Envelope[ProjectCategoryRead])
def update_category(
    uuid: str, body: ProjectCategoryWrite, db: DbSession
) -> Envelope[ProjectCategoryRead]:
    try:
        row = ProjectCategoryRepository(db).update(uuid, body.model_dump())
    except RepositoryError as e:
        raise repository_http_error(e, "updating", NOT_FOUND) from e
    if row is None:
        raise ApiError(404, NOT_FOUND, payload="Data not found")
    return Envelope(
        status_code=200,
        message="Categories updated",
        payload=ProjectCategoryRead.model_validate(row),
    )


@router.delete("/{uuid}", response_model=Envelope[str])
def delete_category(uuid: str, db: DbSession) -> Envelope[str]:
    try:
        ProjectCategoryRepository(db).delete(uuid)
    except RepositoryError as e:
        raise repository_http_error(e, "deleting", NOT_FOUND) from e
    return Envelope(status_code=200, message="Categories removed", payload="Data deleted")
