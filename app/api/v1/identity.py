"""Registration and credential check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies import get_identity_service
from app.schemas.profile import (
    AuthenticateRequest,
    AuthenticateResponse,
    ProfileResponse,
    RegisterRequest,
)
from app.services.identity import IdentityService

router = APIRouter()


@router.post("/register", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[IdentityService, Depends(get_identity_service)],
) -> ProfileResponse:
    """
    Create a user with role 'user'.

    400 when username, email or password is missing; 409 when the username or
    the email is already taken.
    """
    return service.register(body.username, body.email, body.password)


@router.post("/authenticate", response_model=AuthenticateResponse)
def authenticate(
    body: AuthenticateRequest,
    service: Annotated[IdentityService, Depends(get_identity_service)],
) -> AuthenticateResponse:
    """
    Check a password for the user whose username or email equals `identifier`.

    Unknown identifier and wrong password both return 401 with the same body.
    No token is issued here; callers build sessions from the returned identity.
    """
    user = service.authenticate(body.identifier, body.password)
    return AuthenticateResponse(**user.model_dump())
