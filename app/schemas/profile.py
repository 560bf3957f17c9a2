"""Request/response schemas for registration, authentication and profile endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Registration body. Presence is checked by the service so missing fields map to 400."""

    username: str | None = None
    email: str | None = None
    password: str | None = None


class AuthenticateRequest(BaseModel):
    """Credentials; identifier is matched against username or email."""

    identifier: str | None = None
    password: str | None = None


class UpdateProfileRequest(BaseModel):
    """Full profile replacement. Passwords are not changed through this body."""

    username: str | None = None
    email: str | None = None
    role: str | None = None


class ProfileResponse(BaseModel):
    """Outward view of a user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    created_at: datetime
    role: str


class AuthenticatedUser(BaseModel):
    """Identity confirmed by a successful credential check."""

    user_id: str = Field(..., serialization_alias="userId")
    username: str
    email: str
    role: str


class AuthenticateResponse(AuthenticatedUser):
    """Body returned by POST /authenticate."""

    message: str = "Authentication successful"


class DeletionResult(BaseModel):
    """
    Outcome of a delete. The user row is gone in every case; peer_cleanup says
    whether the peer service confirmed removal of the user's data.
    """

    user_id: str
    peer_cleanup: Literal["completed", "skipped", "failed"]
    warning: str | None = Field(
        default=None,
        description="Set when peer cleanup failed; meant for operators to reconcile",
    )
