"""User store gateway: every read and write of the users table, with store errors translated."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, StoreUnavailableError
from app.models import User

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation.
UNIQUE_VIOLATION_SQLSTATE = "23505"

DUPLICATE_USER_MESSAGE = "Username or email already exists"
USER_NOT_FOUND_MESSAGE = "User not found"


def _is_unique_violation(exc: IntegrityError) -> bool:
    """True if the integrity error came from a unique constraint (psycopg2, psycopg or sqlite)."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code == UNIQUE_VIOLATION_SQLSTATE
    return "unique" in str(orig).lower()


class UserStoreGateway:
    """
    Mediates all access to the users table through one SQLAlchemy session.

    Store outcomes are mapped to domain errors: no matching row -> NotFoundError,
    unique constraint violation -> ConflictError, any other SQLAlchemy failure ->
    StoreUnavailableError. Nothing is retried here.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            self._db.rollback()
            if _is_unique_violation(e):
                logger.info("User store %s rejected duplicate", operation)
                raise ConflictError(DUPLICATE_USER_MESSAGE) from e
            logger.error(
                "User store %s failed on constraint",
                operation,
                extra={"store_operation": operation, "reason": str(e.orig)[:500]},
            )
            raise StoreUnavailableError(f"Database error during {operation}") from e
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error(
                "User store %s failed",
                operation,
                extra={"store_operation": operation, "reason": str(e)[:500]},
            )
            raise StoreUnavailableError(f"Database error during {operation}") from e

    def find_by_username_or_email(self, value: str) -> User | None:
        """Return the first user whose username or email equals value."""
        with self._translate_errors("user lookup"):
            return (
                self._db.query(User)
                .filter(or_(User.username == value, User.email == value))
                .limit(1)
                .first()
            )

    def exists_by_username_or_email(self, username: str, email: str) -> bool:
        with self._translate_errors("uniqueness check"):
            match = (
                self._db.query(User.id)
                .filter(or_(User.username == username, User.email == email))
                .limit(1)
                .first()
            )
        return match is not None

    def insert(self, username: str, email: str, password_hash: str) -> User:
        """Insert a user with the default role. Raises ConflictError on a duplicate."""
        with self._translate_errors("registration"):
            user = User(username=username, email=email, password_hash=password_hash)
            self._db.add(user)
            self._db.commit()
            self._db.refresh(user)
        return user

    def list_all(self) -> list[User]:
        with self._translate_errors("profile listing"):
            return self._db.query(User).order_by(User.created_at, User.id).all()

    def get_by_id(self, user_id: str) -> User:
        with self._translate_errors("profile fetch"):
            user = self._db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return user

    def update_by_id(self, user_id: str, *, username: str, email: str, role: str) -> User:
        """Replace username, email and role and refresh updated_at."""
        with self._translate_errors("profile update"):
            updated_count = (
                self._db.query(User)
                .filter(User.id == user_id)
                .update(
                    {
                        User.username: username,
                        User.email: email,
                        User.role: role,
                        User.updated_at: datetime.now(UTC),
                    },
                    synchronize_session=False,
                )
            )
            self._db.commit()
        if updated_count == 0:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        # The row may be deleted again before this read; get_by_id then raises NotFoundError.
        return self.get_by_id(user_id)

    def delete_by_id(self, user_id: str) -> None:
        with self._translate_errors("profile deletion"):
            deleted_count = (
                self._db.query(User)
                .filter(User.id == user_id)
                .delete(synchronize_session=False)
            )
            self._db.commit()
        if deleted_count == 0:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
