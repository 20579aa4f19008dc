"""Schemas for pipelines: raw-FK write shape and denormalised read shape."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from pipeline_api.schemas.common import RequiredStr


class PipelineWrite(BaseModel):
    """Body for create and update. Foreign keys are internal integer ids."""

    id_category_project: PositiveInt
    project_name: RequiredStr = Field(..., max_length=255)
    id_user_sales: PositiveInt
    id_end_user: PositiveInt
    id_pic_project: PositiveInt
    product_price: Decimal
    service_price: Decimal
    margin: Decimal
    estimated_closed_date: date
    estimated_delivered_date: date
    description: str | None = None
    status: RequiredStr = Field(..., max_length=64, description='e.g. "ON GOING", "LOST"')
    file_url: str | None = Field(default=None, max_length=2048)


class PipelineRecord(PipelineWrite):
    """Stored row as returned by create/update (raw foreign keys)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PipelineDetail(BaseModel):
    """Pipeline with category, sales, PIC and end-user names joined in."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    project_name: str
    sales_name: str | None = None
    pic_name: str | None = None
    end_user_name: str | None = None
    product_price: Decimal
    service_price: Decimal
    margin: Decimal
    status: str
    categories: str | None = None
    description: str | None = None
    file_url: str | None = None
    estimated_closed_date: date
    estimated_delivered_date: date
    created_at: datetime | None = None
    updated_at: datetime | None = None
