"""Request/response schemas for login and the authenticated identity."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pipeline_api.models.user import Role
from pipeline_api.schemas.common import RequiredStr


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: RequiredStr = Field(..., max_length=255, description="Account email")
    password: RequiredStr = Field(..., max_length=128, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")


class CurrentUser(BaseModel):
    """Identity decoded from the access token. id is the user's public uuid."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str
    role: Role

    @field_validator("role", mode="before")
    @classmethod
    def collapse_role(cls, v: object) -> Role:
        # Stored roles are free text; only "admin" is privileged.
        return Role.from_stored(v)
