"""ORM model for identity records."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, String, func

from app.models.base import Base

USER_ROLES = ("user", "admin")
DEFAULT_ROLE = "user"


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    User account: credentials, profile and role.

    username and email are each unique; role is 'user' or 'admin'.
    password_hash must never leave the service.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )

    id = Column(String(36), primary_key=True, default=_new_user_id)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE, server_default=DEFAULT_ROLE)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
