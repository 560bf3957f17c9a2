"""Pydantic request/response schemas."""

from app.schemas.health import HealthResponse
from app.schemas.profile import (
    AuthenticatedUser,
    AuthenticateRequest,
    AuthenticateResponse,
    DeletionResult,
    ProfileResponse,
    RegisterRequest,
    UpdateProfileRequest,
)

__all__ = [
    "AuthenticatedUser",
    "AuthenticateRequest",
    "AuthenticateResponse",
    "DeletionResult",
    "HealthResponse",
    "ProfileResponse",
    "RegisterRequest",
    "UpdateProfileRequest",
]
