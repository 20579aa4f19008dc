"""ORM model for sales pipelines (deals in progress)."""

from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, String, Text

from pipeline_api.models.base import SCHEMA, Base, TimestampedMixin


class Pipeline(TimestampedMixin, Base):
    """
    A sales deal tracked through a free-text status (e.g. "ON GOING", "LOST").

    Foreign keys reference internal integer ids; the API exposes names via joins.
    """

    __tablename__ = "pipelines"

    id_category_project = Column(
        Integer, ForeignKey(f"{SCHEMA}.project_categories.id"), nullable=False
    )
    project_name = Column(String(255), nullable=False)
    id_user_sales = Column(Integer, ForeignKey(f"{SCHEMA}.pipeline_users.id"), nullable=False)
    id_end_user = Column(Integer, ForeignKey(f"{SCHEMA}.end_users.id"), nullable=False)
    id_pic_project = Column(Integer, ForeignKey(f"{SCHEMA}.pipeline_users.id"), nullable=False)
    product_price = Column(Numeric(18, 2), nullable=False)
    service_price = Column(Numeric(18, 2), nullable=False)
    margin = Column(Numeric(18, 2), nullable=False)
    estimated_closed_date = Column(Date, nullable=False)
    estimated_delivered_date = Column(Date, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(64), nullable=False, index=True)
    file_url = Column(String(2048), nullable=True)
