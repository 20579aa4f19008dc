"""Response envelope and shared field types."""

from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, Field, StringConstraints

T = TypeVar("T")

# Required text: present and non-empty ("" counts as missing).
RequiredStr = Annotated[str, StringConstraints(min_length=1)]


class Envelope(BaseModel, Generic[T]):
    """Uniform body for every response: status code, human-readable message, payload."""

    status_code: int = Field(..., description="HTTP status code, repeated in the body")
    message: str = Field(..., description="Human-readable outcome")
    payload: T = Field(..., description="Entity, list of entities, or a placeholder string on error")
