"""Change request endpoints and the admin-only approval route."""

import logging

from fastapi import APIRouter, status

from pipeline_api.api.deps import AdminIdentity, DbSession, Identity
from pipeline_api.api.responses import ApiError, repository_http_error
from pipeline_api.repositories.change_requests import ChangeRequestRepository
from pipeline_api.repositories.errors import RepositoryError
from pipeline_api.schemas.change_requests import (
    ChangeRequestCreate,
    ChangeRequestDetail,
    ChangeRequestRecord,
)
from pipeline_api.schemas.common import Envelope

logger = logging.getLogger(__name__)

router = APIRouter()
approval_router = APIRouter()

NOT_FOUND = "Change Request not found"


@router.get("", response_model=Envelope[list[ChangeRequestDetail]])
def list_change_requests(db: DbSession) -> Envelope[list[ChangeRequestDetail]]:
    """All change requests with pipeline, end-user, requester and approver names."""
    try:
        rows = ChangeRequestRepository(db).list_all()
    except RepositoryError as e:
        raise repository_http_error(e, "retrieving", NOT_FOUND) from e
    return Envelope(
        status_code=200,
        message="Get all changeRequest",
        payload=[ChangeRequestDetail.model_validate(row) for row in rows],
    )


@router.get("/{uuid}", response_model=Envelope[ChangeRequestDetail])
def get_change_request(uuid: str, db: DbSession) -> Envelope[ChangeRequestDetail]:
    try:
        row = ChangeRequestRepository(db).get_by_uuid(uuid)
    except RepositoryError as e:
        raise repository_http_error(e, "retrieving", NOT_FOUND) from e
    if row is None:
        raise ApiError(404, NOT_FOUND, payload=None)
    return Envelope(
        status_code=200,
        message="Get change request by ID",
        payload=ChangeRequestDetail.model_validate(row),
    )


@router.post("", response_model=Envelope[ChangeRequestRecord], status_code=status.HTTP_201_CREATED)
def create_change_request(
    body: ChangeRequestCreate,
    db: DbSession,
    current_user: Identity,
) -> Envelope[ChangeRequestRecord]:
    """Open a PENDING request on behalf of the caller; an admin approves it later."""
    try:
        row = ChangeRequestRepository(db).create_request(body.model_dump(), current_user.id)
    except RepositoryError as e:
        raise repository_http_error(e, "creating", NOT_FOUND) from e
    return Envelope(
        status_code=201,
        message="Change Request created",
        payload=ChangeRequestRecord.model_validate(row),
    )


@approval_router.put("/{uuid}", response_model=Envelope[int])
def approve_change_request(uuid: str, db: DbSession, admin: AdminIdentity) -> Envelope[int]:
    """
    Approve a change request (admin only).

    Sets the target pipeline's status to the requested value and marks the
    request APPROVED in one transaction. Returns the number of requests updated;
    a request that is no longer PENDING is left as is (409).
    """
    try:
        affected = ChangeRequestRepository(db).approve(uuid, admin.id)
    except RepositoryError as e:
        raise repository_http_error(e, "updating", NOT_FOUND) from e
    if affected is None:
        raise ApiError(404, NOT_FOUND, payload=None)
    if affected == 0:
        raise ApiError(409, "Change Request already approved", payload="Data error")
    return Envelope(status_code=200, message="Change Request updated", payload=affected)
