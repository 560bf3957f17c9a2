"""
Domain error taxonomy and the FastAPI handlers that render it.

Every store or peer failure is translated into one of these kinds before it
leaves the component that observed it; handlers turn them into
``{"error": message}`` bodies with the matching status code.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class IdentityError(Exception):
    """Base class for failures scoped to a single identity operation."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(IdentityError):
    """Caller-fixable input problem (missing field, invalid role)."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(IdentityError):
    """Bad credentials. Unknown user and wrong password are indistinguishable."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(IdentityError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(IdentityError):
    """Username or email already taken."""

    status_code = status.HTTP_409_CONFLICT


class StoreUnavailableError(IdentityError):
    """The relational store failed; not retried."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class PeerFailureError(IdentityError):
    """The peer service did not confirm deletion of a user's data."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, peer_status: int | None = None) -> None:
        self.peer_status = peer_status
        super().__init__(message)


def error_body(message: str) -> dict[str, str]:
    return {"error": message}


def register_exception_handlers(app: FastAPI) -> None:
    """Register domain, validation and fallback handlers on the FastAPI app."""

    @app.exception_handler(IdentityError)
    async def identity_error_handler(request: Request, exc: IdentityError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info(
            "Rejected malformed request body",
            extra={"path": request.url.path, "error_count": len(exc.errors())},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Malformed request body."),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error"),
        )
