"""Profile endpoints: list, fetch, update and delete-with-cascade."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import get_identity_service
from app.core.config import Settings, get_settings
from app.core.errors import error_body
from app.schemas.profile import ProfileResponse, UpdateProfileRequest
from app.services.identity import IdentityService

router = APIRouter()


@router.get("", response_model=list[ProfileResponse])
def list_profiles(
    service: Annotated[IdentityService, Depends(get_identity_service)],
) -> list[ProfileResponse]:
    """Return every user's profile. No filtering or pagination."""
    return service.list_profiles()


@router.get("/{user_id}", response_model=ProfileResponse)
def get_profile(
    user_id: str,
    service: Annotated[IdentityService, Depends(get_identity_service)],
) -> ProfileResponse:
    return service.get_profile(user_id)


@router.put("/{user_id}", response_model=ProfileResponse)
def update_profile(
    user_id: str,
    body: UpdateProfileRequest,
    service: Annotated[IdentityService, Depends(get_identity_service)],
) -> ProfileResponse:
    """Replace username, email and role. Role must be 'user' or 'admin'."""
    return service.update_profile(user_id, body.username, body.email, body.role)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_profile(
    user_id: str,
    service: Annotated[IdentityService, Depends(get_identity_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Response:
    """
    Delete the user, then the user's data in the peer service.

    204 when the user is gone and the peer confirmed (or no peer is configured).
    If the peer cleanup fails the user stays deleted and the response carries
    the failure: 500 with an error body by default, or 200 with a warning body
    when PEER_FAILURE_STATUS_CODE=200.
    """
    result = await service.delete_profile(user_id)
    if result.peer_cleanup == "failed":
        if settings.PEER_FAILURE_STATUS_CODE == status.HTTP_200_OK:
            return JSONResponse(status_code=status.HTTP_200_OK, content={"warning": result.warning})
        return JSONResponse(
            status_code=settings.PEER_FAILURE_STATUS_CODE,
            content=error_body(result.warning or "Failed to delete associated data"),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
