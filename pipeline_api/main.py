"""FastAPI application factory. No business logic; only wiring and middleware."""

import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session, sessionmaker

from pipeline_api.api import router as api_router
from pipeline_api.api.responses import register_exception_handlers
from pipeline_api.core.config import Settings, load_settings
from pipeline_api.core.database import build_session_factory, create_db_engine
from pipeline_api.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """
    Build the app around explicit settings and a session factory.

    Both are stored on app.state and reached through dependencies, so tests
    can pass their own instead of reading the environment.
    """
    if settings is None:
        load_dotenv()
        settings = load_settings()
    configure_logging(settings.LOG_LEVEL)
    if session_factory is None:
        session_factory = build_session_factory(create_db_engine(settings))

    app = FastAPI(
        title="Pipeline API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Pipeline API"}

    logger.info("Pipeline API configured (env=%s, prefix=%s)", settings.APP_ENV, settings.API_PREFIX)
    return app


def run() -> None:
    """Console entrypoint: serve the app with uvicorn."""
    uvicorn.run("pipeline_api.main:create_app", factory=True, host="0.0.0.0", port=8000)
