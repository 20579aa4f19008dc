"""Initial pipeline schema: users, end users, categories, pipelines, change requests.

Revision ID: 20241001000000
Revises:
Create Date: 2024-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20241001000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCHEMA = "pipeline"


def _common_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("uuid", sa.String(length=36), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _create_uuid_index(table: str) -> None:
    op.create_index(op.f(f"ix_{SCHEMA}_{table}_uuid"), table, ["uuid"], unique=True, schema=SCHEMA)


def upgrade() -> None:
    op.execute(f"CREATE SCHEMA IF NOT EXISTS {SCHEMA}")

    op.create_table(
        "pipeline_users",
        *_common_columns(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="user"),
        sa.Column("birthdate", sa.Date(), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        schema=SCHEMA,
    )
    _create_uuid_index("pipeline_users")
    op.create_index(
        op.f(f"ix_{SCHEMA}_pipeline_users_email"),
        "pipeline_users",
        ["email"],
        unique=True,
        schema=SCHEMA,
    )

    op.create_table(
        "end_users",
        *_common_columns(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=1024), nullable=False),
        sa.Column("pic_name", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        schema=SCHEMA,
    )
    _create_uuid_index("end_users")

    op.create_table(
        "project_categories",
        *_common_columns(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        schema=SCHEMA,
    )
    _create_uuid_index("project_categories")

    op.create_table(
        "pipelines",
        *_common_columns(),
        sa.Column("id_category_project", sa.Integer(), nullable=False),
        sa.Column("project_name", sa.String(length=255), nullable=False),
        sa.Column("id_user_sales", sa.Integer(), nullable=False),
        sa.Column("id_end_user", sa.Integer(), nullable=False),
        sa.Column("id_pic_project", sa.Integer(), nullable=False),
        sa.Column("product_price", sa.Numeric(18, 2), nullable=False),
        sa.Column("service_price", sa.Numeric(18, 2), nullable=False),
        sa.Column("margin", sa.Numeric(18, 2), nullable=False),
        sa.Column("estimated_closed_date", sa.Date(), nullable=False),
        sa.Column("estimated_delivered_date", sa.Date(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=64), nullable=False),
        sa.Column("file_url", sa.String(length=2048), nullable=True),
        sa.ForeignKeyConstraint(["id_category_project"], [f"{SCHEMA}.project_categories.id"]),
        sa.ForeignKeyConstraint(["id_user_sales"], [f"{SCHEMA}.pipeline_users.id"]),
        sa.ForeignKeyConstraint(["id_end_user"], [f"{SCHEMA}.end_users.id"]),
        sa.ForeignKeyConstraint(["id_pic_project"], [f"{SCHEMA}.pipeline_users.id"]),
        sa.PrimaryKeyConstraint("id"),
        schema=SCHEMA,
    )
    _create_uuid_index("pipelines")
    op.create_index(
        op.f(f"ix_{SCHEMA}_pipelines_status"), "pipelines", ["status"], unique=False, schema=SCHEMA
    )

    op.create_table(
        "change_request",
        *_common_columns(),
        sa.Column("id_pipeline", sa.Integer(), nullable=False),
        sa.Column("id_end_user", sa.Integer(), nullable=False),
        sa.Column("new_status", sa.String(length=64), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column(
            "request_status", sa.String(length=32), nullable=False, server_default="PENDING"
        ),
        sa.Column("id_user_request", sa.Integer(), nullable=True),
        sa.Column("id_user_approval", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["id_pipeline"], [f"{SCHEMA}.pipelines.id"]),
        sa.ForeignKeyConstraint(["id_end_user"], [f"{SCHEMA}.end_users.id"]),
        sa.ForeignKeyConstraint(
            ["id_user_request"], [f"{SCHEMA}.pipeline_users.id"], ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(
            ["id_user_approval"], [f"{SCHEMA}.pipeline_users.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        schema=SCHEMA,
    )
    _create_uuid_index("change_request")
    op.create_index(
        op.f(f"ix_{SCHEMA}_change_request_request_status"),
        "change_request",
        ["request_status"],
        unique=False,
        schema=SCHEMA,
    )


def downgrade() -> None:
    op.drop_table("change_request", schema=SCHEMA)
    op.drop_table("pipelines", schema=SCHEMA)
    op.drop_table("project_categories", schema=SCHEMA)
    op.drop_table("end_users", schema=SCHEMA)
    op.drop_table("pipeline_users", schema=SCHEMA)
