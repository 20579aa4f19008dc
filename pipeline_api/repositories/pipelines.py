"""Pipeline repository. Reads join in category, sales, PIC and end-user names."""

from typing import Any

from sqlalchemy.orm import Query, aliased

from pipeline_api.models import EndUser, Pipeline, ProjectCategory, User
from pipeline_api.repositories.base import BaseRepository


class PipelineRepository(BaseRepository[Pipeline]):
    model = Pipeline
    entity_name = "Pipeline"

    def _read_query(self) -> Query[Any]:
        sales = aliased(User, name="sales_user")
        pic = aliased(User, name="pic_user")
        return (
            self.db.query(
                Pipeline.id,
                Pipeline.uuid,
                Pipeline.project_name,
                sales.name.label("sales_name"),
                pic.name.label("pic_name"),
                EndUser.name.label("end_user_name"),
                Pipeline.product_price,
                Pipeline.service_price,
                Pipeline.margin,
                Pipeline.status,
                ProjectCategory.name.label("categories"),
                Pipeline.description,
                Pipeline.file_url,
                Pipeline.estimated_closed_date,
                Pipeline.estimated_delivered_date,
                Pipeline.created_at,
                Pipeline.updated_at,
            )
            .outerjoin(ProjectCategory, Pipeline.id_category_project == ProjectCategory.id)
            .outerjoin(sales, Pipeline.id_user_sales == sales.id)
            .outerjoin(pic, Pipeline.id_pic_project == pic.id)
            .outerjoin(EndUser, Pipeline.id_end_user == EndUser.id)
        )
