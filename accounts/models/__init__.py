"""SQLAlchemy ORM models."""

from accounts.models.base import Base
from accounts.models.user import User

__all__ = ["Base", "User"]
