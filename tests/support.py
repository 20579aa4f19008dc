"""Shared test helpers: in-memory SQLite store, settings and seed data."""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import SecretStr
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pipeline_api.core.config import Settings
from pipeline_api.core.security import create_access_token, hash_password
from pipeline_api.models import Base, EndUser, Pipeline, ProjectCategory, User
from pipeline_api.models.base import SCHEMA
from pipeline_api.repositories import (
    EndUserRepository,
    PipelineRepository,
    ProjectCategoryRepository,
    UserRepository,
)

TEST_PASSWORD = "S3cure!pass"


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "APP_ENV": "test",
        "JWT_SECRET": SecretStr("test-secret"),
        "JWT_EXPIRE_MINUTES": 5,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_engine() -> Engine:
    """SQLite in memory, one shared connection, with the pipeline schema mapped to main."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    ).execution_options(schema_translate_map={SCHEMA: None})
    Base.metadata.create_all(bind=engine)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def seed_user(
    db: Session,
    email: str = "sales@example.com",
    role: str = "user",
    name: str = "Budi",
    password: str = TEST_PASSWORD,
) -> User:
    return UserRepository(db).create(
        {
            "name": name,
            "email": email,
            "role": role,
            "birthdate": date(1990, 1, 31),
            "password": hash_password(password, rounds=4),
        }
    )


def seed_pipeline(db: Session, status: str = "ON GOING") -> dict[str, Any]:
    """Category, end user, sales user, PIC user and one pipeline referencing them."""
    category: ProjectCategory = ProjectCategoryRepository(db).create({"name": "IT Infrastructure"})
    end_user: EndUser = EndUserRepository(db).create(
        {
            "name": "PT. SPIL",
            "address": "Jl. Perak Timur 620, Surabaya",
            "pic_name": "Rudi",
            "phone_number": "+62 31 1234567",
        }
    )
    sales = seed_user(db, email="budi@example.com", name="Budi")
    pic = seed_user(db, email="andi@example.com", name="Andi")
    pipeline: Pipeline = PipelineRepository(db).create(
        {
            "id_category_project": category.id,
            "project_name": "Pengadaan Data Center",
            "id_user_sales": sales.id,
            "id_end_user": end_user.id,
            "id_pic_project": pic.id,
            "product_price": Decimal("55000000"),
            "service_price": Decimal("150000"),
            "margin": Decimal("200000"),
            "estimated_closed_date": date(2024, 4, 20),
            "estimated_delivered_date": date(2024, 4, 30),
            "description": "Two racks and cabling",
            "status": status,
            "file_url": None,
        }
    )
    return {
        "category": category,
        "end_user": end_user,
        "sales": sales,
        "pic": pic,
        "pipeline": pipeline,
    }


def token_for(user: User, settings: Settings) -> str:
    return create_access_token(
        {"id": user.uuid, "email": user.email, "name": user.name, "role": user.role},
        settings,
    )


def pipeline_body(ids: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """JSON body for POST/PUT /pipelines built from the internal ids of seeded rows."""
    body: dict[str, Any] = {
        "id_category_project": ids["category_id"],
        "project_name": "Migrasi Cloud",
        "id_user_sales": ids["sales_id"],
        "id_end_user": ids["end_user_id"],
        "id_pic_project": ids["pic_id"],
        "product_price": "1000000",
        "service_price": "250000",
        "margin": "100000",
        "estimated_closed_date": "2024-06-01",
        "estimated_delivered_date": "2024-07-01",
        "description": "Lift and shift",
        "status": "ON GOING",
    }
    body.update(overrides)
    return body
