"""Payload of the public health endpoint."""

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Process is up; database says whether the pipeline store answered SELECT 1."""

    status: Literal["ok"] = "ok"
    environment: str
    database: Literal["connected", "disconnected"]
