"""Identity service: registration, authentication, profile CRUD and delete-with-cascade."""

import logging

from fastapi.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.errors import (
    ConflictError,
    InvalidInputError,
    PeerFailureError,
    UnauthorizedError,
)
from app.core.security import dummy_password_hash, hash_password, verify_password
from app.models import USER_ROLES
from app.schemas.profile import AuthenticatedUser, DeletionResult, ProfileResponse
from app.services.peer_deletion import PeerDeletionClient
from app.services.user_store import DUPLICATE_USER_MESSAGE, UserStoreGateway

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


def _missing(*values: str | None) -> bool:
    return any(v is None or v == "" for v in values)


class IdentityService:
    """
    Owns the business rules for user identities.

    The store is the single authority for uniqueness and existence: the
    pre-insert duplicate check is only a fast path, and a Conflict or NotFound
    reported by the store at write time always wins.
    """

    def __init__(
        self,
        store: UserStoreGateway,
        peer_client: PeerDeletionClient | None = None,
        bcrypt_rounds: int | None = None,
    ) -> None:
        self._store = store
        self._peer_client = peer_client
        self._bcrypt_rounds = settings.BCRYPT_ROUNDS if bcrypt_rounds is None else bcrypt_rounds

    def register(
        self,
        username: str | None,
        email: str | None,
        password: str | None,
    ) -> ProfileResponse:
        if _missing(username, email, password):
            raise InvalidInputError("Username, email, and password are required.")

        if self._store.exists_by_username_or_email(username, email):
            logger.warning(
                "Registration rejected: username or email already exists",
                extra={"username": username},
            )
            raise ConflictError(DUPLICATE_USER_MESSAGE)

        password_hash = hash_password(password, rounds=self._bcrypt_rounds)
        # A concurrent registration may win between the check and this insert;
        # the store's unique constraints then raise ConflictError.
        user = self._store.insert(username, email, password_hash)
        logger.info("User registered", extra={"user_id": user.id, "username": user.username})
        return ProfileResponse.model_validate(user)

    def authenticate(self, identifier: str | None, password: str | None) -> AuthenticatedUser:
        """
        Check a password for the user whose username or email equals identifier.

        Unknown identifier and wrong password raise the same UnauthorizedError.
        """
        if _missing(identifier, password):
            raise InvalidInputError(
                "Identifier (username or email) and password are required"
            )

        user = self._store.find_by_username_or_email(identifier)
        if user is None:
            # Keep the cost of both failure paths equal.
            verify_password(password, dummy_password_hash(self._bcrypt_rounds))
            logger.info("Authentication failed: no user for identifier")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        if not verify_password(password, user.password_hash):
            logger.info(
                "Authentication failed: password mismatch",
                extra={"user_id": user.id},
            )
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("Authentication successful", extra={"user_id": user.id})
        return AuthenticatedUser(
            user_id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
        )

    def list_profiles(self) -> list[ProfileResponse]:
        users = self._store.list_all()
        logger.debug("Listed profiles", extra={"profile_count": len(users)})
        return [ProfileResponse.model_validate(u) for u in users]

    def get_profile(self, user_id: str) -> ProfileResponse:
        return ProfileResponse.model_validate(self._store.get_by_id(user_id))

    def update_profile(
        self,
        user_id: str,
        username: str | None,
        email: str | None,
        role: str | None,
    ) -> ProfileResponse:
        if _missing(username, email, role):
            raise InvalidInputError("Username, email, and role are required for update")
        if role not in USER_ROLES:
            logger.warning(
                "Profile update rejected: invalid role",
                extra={"user_id": user_id, "role": role},
            )
            raise InvalidInputError('Invalid role value. Must be "user" or "admin".')

        user = self._store.update_by_id(user_id, username=username, email=email, role=role)
        logger.info("Profile updated", extra={"user_id": user_id, "role": role})
        return ProfileResponse.model_validate(user)

    async def delete_profile(self, user_id: str) -> DeletionResult:
        """
        Delete the user row, then ask the peer service to drop the user's data.

        The row deletion commits first and is never undone. NotFoundError and
        StoreUnavailableError from the store propagate; a peer failure does not,
        it is reported as peer_cleanup="failed" with a warning.
        """
        await run_in_threadpool(self._store.delete_by_id, user_id)
        logger.info("User deleted", extra={"user_id": user_id})

        if self._peer_client is None:
            logger.warning(
                "Peer service not configured; skipping cascade delete",
                extra={"user_id": user_id},
            )
            return DeletionResult(user_id=user_id, peer_cleanup="skipped")

        try:
            await self._peer_client.delete_user_data(user_id)
        except PeerFailureError as e:
            warning = f"Failed to delete associated {self._peer_client.resource}: {e.message}"
            logger.error(
                "User deleted but peer cleanup failed; reconciliation needed",
                extra={
                    "user_id": user_id,
                    "peer_status": e.peer_status,
                    "reason": e.message,
                },
            )
            return DeletionResult(user_id=user_id, peer_cleanup="failed", warning=warning)

        return DeletionResult(user_id=user_id, peer_cleanup="completed")
