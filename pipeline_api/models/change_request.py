"""ORM model for proposed pipeline status changes awaiting admin approval."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from pipeline_api.models.base import SCHEMA, Base, TimestampedMixin

REQUEST_STATUS_PENDING = "PENDING"
REQUEST_STATUS_APPROVED = "APPROVED"


class ChangeRequest(TimestampedMixin, Base):
    """
    request_status only moves PENDING -> APPROVED, and only through approval.
    """

    __tablename__ = "change_request"

    id_pipeline = Column(Integer, ForeignKey(f"{SCHEMA}.pipelines.id"), nullable=False)
    id_end_user = Column(Integer, ForeignKey(f"{SCHEMA}.end_users.id"), nullable=False)
    new_status = Column(String(64), nullable=False)
    note = Column(Text, nullable=True)
    request_status = Column(
        String(32), nullable=False, default=REQUEST_STATUS_PENDING, index=True
    )
    id_user_request = Column(
        Integer, ForeignKey(f"{SCHEMA}.pipeline_users.id", ondelete="SET NULL"), nullable=True
    )
    id_user_approval = Column(
        Integer, ForeignKey(f"{SCHEMA}.pipeline_users.id", ondelete="SET NULL"), nullable=True
    )
