"""Pipeline endpoints: list, get, create, update, delete by public uuid."""

from fastapi import APIRouter, status

from pipeline_api.api.deps import DbSession
from pipeline_api.api.responses import ApiError, repository_http_error
from pipeline_api.repositories.errors import RepositoryError
from pipeline_api.repositories.pipelines import PipelineRepository
from pipeline_api.schemas.common import Envelope
from pipeline_api.schemas.pipelines import PipelineDetail, PipelineRecord, PipelineWrite

router = APIRouter()

NOT_FOUND = "Pipeline not found"


@router.get("", response_model=Envelope[list[PipelineDetail]])
def list_pipelines(db: DbSession) -> Envelope[list[PipelineDetail]]:
    """All pipelines with category, sales, PIC and end-user names."""
    try:
        rows = PipelineRepository(db).list_all()
    except RepositoryError as e:
        raise repository_http_error(e, "retrieving", NOT_FOUND) from e
    return Envelope(
        status_code=200,
        message="Get all pipeline",
        payload=[PipelineDetail.model_validate(row) for row in rows],
    )


@router.get("/{uuid}", response_model=Envelope[PipelineDetail])
def get_pipeline(uuid: str, db: DbSession) -> Envelope[PipelineDetail]:
    try:
        row = PipelineRepository(db).get_by_uuid(uuid)
    except RepositoryError as e:
        raise repository_http_error(e, "retrieving", NOT_FOUND) from e
    if row is None:
        raise ApiError(404, NOT_FOUND, payload=None)
    return Envelope(
        status_code=200,
        message="Get pipeline by ID",
        payload=PipelineDetail.model_validate(row),
    )


@router.post("", response_model=Envelope[PipelineRecord], status_code=status.HTTP_201_CREATED)
def create_pipeline(body: PipelineWrite, db: DbSession) -> Envelope[PipelineRecord]:
    try:
        row = PipelineRepository(db).create(body.model_dump())
    except RepositoryError as e:
        raise repository_http_error(e, "creating", NOT_FOUND) from e
    return Envelope(
        status_code=201,
        message="Pipeline created",
        payload=PipelineRecord.model_validate(row),
    )


@router.put("/{uuid}", response_model=Envelope[PipelineRecord])
def update_pipeline(uuid: str, body: PipelineWrite, db: DbSession) -> Envelope[PipelineRecord]:
    try:
        row = PipelineRepository(db).update(uuid, body.model_dump())
    except RepositoryError as e:
        raise repository_http_error(e, "updating", NOT_FOUND) from e
    if row is None:
        raise ApiError(404, NOT_FOUND, payload=None)
    return Envelope(
        status_code=200,
        message="Pipeline updated",
        payload=PipelineRecord.model_validate(row),
    )


@router.delete("/{uuid}", response_model=Envelope[str])
def delete_pipeline(uuid: str, db: DbSession) -> Envelope[str]:
    try:
        PipelineRepository(db).delete(uuid)
    except RepositoryError as e:
        raise repository_http_error(e, "deleting", NOT_FOUND) from e
    return Envelope(status_code=200, message=f"Pipeline {uuid} removed", payload="Data deleted")
