"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.user import DEFAULT_ROLE, USER_ROLES, User

__all__ = ["Base", "DEFAULT_ROLE", "USER_ROLES", "User"]
