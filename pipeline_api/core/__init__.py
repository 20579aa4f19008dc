"""Core app configuration and database."""

from pipeline_api.core.config import Settings, load_settings
from pipeline_api.core.database import get_db

__all__ = ["Settings", "load_settings", "get_db"]
