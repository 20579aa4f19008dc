"""Change request repository and the transactional approval protocol."""

import logging
from typing import Any

from sqlalchemy.orm import Query, aliased

from pipeline_api.models import ChangeRequest, EndUser, Pipeline, User
from pipeline_api.models.base import utcnow
from pipeline_api.models.change_request import (
    REQUEST_STATUS_APPROVED,
    REQUEST_STATUS_PENDING,
)
from pipeline_api.repositories.base import BaseRepository
from pipeline_api.repositories.errors import NoRowsAffectedError
from pipeline_api.repositories.users import UserRepository

logger = logging.getLogger(__name__)


class ChangeRequestRepository(BaseRepository[ChangeRequest]):
    model = ChangeRequest
    entity_name = "Change Request"

    def _read_query(self) -> Query[Any]:
        requester = aliased(User, name="user_request")
        approver = aliased(User, name="user_approve")
        return (
            self.db.query(
                ChangeRequest.id,
                ChangeRequest.uuid,
                Pipeline.project_name,
                EndUser.name.label("end_user"),
                requester.name.label("user_request"),
                approver.name.label("user_approve"),
                Pipeline.status.label("current_status"),
                ChangeRequest.new_status,
                ChangeRequest.note,
                ChangeRequest.request_status,
                ChangeRequest.created_at,
                ChangeRequest.updated_at,
            )
            .outerjoin(Pipeline, ChangeRequest.id_pipeline == Pipeline.id)
            .outerjoin(EndUser, ChangeRequest.id_end_user == EndUser.id)
            .outerjoin(requester, ChangeRequest.id_user_request == requester.id)
            .outerjoin(approver, ChangeRequest.id_user_approval == approver.id)
        )

    def create_request(self, values: dict[str, Any], requester_uuid: str) -> ChangeRequest:
        """Insert a PENDING request on behalf of the authenticated caller."""
        requester_id = UserRepository(self.db).id_for_uuid(requester_uuid)
        return self.create(
            {
                **values,
                "id_user_request": requester_id,
                "id_user_approval": None,
                "request_status": REQUEST_STATUS_PENDING,
            }
        )

    def approve(self, uuid: str, approver_uuid: str) -> int | None:
        """
        Apply a change request to its pipeline and mark it APPROVED.

        Lookup, pipeline status update and request update share one
        transaction: if any step fails, both rows are left untouched.
        Returns None (nothing written) when no request has this uuid,
        0 (nothing written) when the request is no longer PENDING,
        otherwise the number of change-request rows updated.
        """
        with self._guard("approving change request"):
            change_request = (
                self.db.query(ChangeRequest)
                .filter(ChangeRequest.uuid == uuid)
                .with_for_update()
                .first()
            )
            if change_request is None:
                self.db.rollback()
                return None
            current = change_request.request_status
            if current != REQUEST_STATUS_PENDING:
                self.db.rollback()
                logger.info("Change request %s not approved: status is %s", uuid, current)
                return 0

            approver_id = UserRepository(self.db).id_for_uuid(approver_uuid)
            pipeline_uuid = (
                self.db.query(Pipeline.uuid)
                .filter(Pipeline.id == change_request.id_pipeline)
                .scalar()
            )
            self._apply_pipeline_status(pipeline_uuid, change_request.new_status)
            affected = self._mark_approved(change_request.uuid, approver_id)
            if affected == 0:
                raise NoRowsAffectedError("No rows were affected")
            self.db.commit()
            logger.info(
                "Change request %s approved: pipeline %s status -> %s",
                uuid,
                pipeline_uuid,
                change_request.new_status,
            )
            return affected

    def _apply_pipeline_status(self, pipeline_uuid: str | None, new_status: str) -> None:
        updated = (
            self.db.query(Pipeline)
            .filter(Pipeline.uuid == pipeline_uuid)
            .update(
                {Pipeline.status: new_status, Pipeline.updated_at: utcnow()},
                synchronize_session=False,
            )
        )
        if updated == 0:
            raise NoRowsAffectedError("Target pipeline no longer exists")

    def _mark_approved(self, uuid: str, approver_id: int | None) -> int:
        return (
            self.db.query(ChangeRequest)
            .filter(ChangeRequest.uuid == uuid, ChangeRequest.request_status == REQUEST_STATUS_PENDING)
            .update(
                {
                    ChangeRequest.request_status: REQUEST_STATUS_APPROVED,
                    ChangeRequest.id_user_approval: approver_id,
                    ChangeRequest.updated_at: utcnow(),
                },
                synchronize_session=False,
            )
        )
