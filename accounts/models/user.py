"""ORM model for user accounts (auth and RBAC)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, true

from accounts.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    email is stored lowercase; role: 'admin' or 'user'.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(50), nullable=False)
    role = Column(String(16), nullable=False, server_default="user")
    is_active = Column(Boolean, nullable=False, server_default=true())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
