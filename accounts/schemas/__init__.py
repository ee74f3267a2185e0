"""Pydantic request/response schemas."""

from accounts.schemas.auth import (
    Identity,
    LoginRequest,
    LoginResponse,
    LoginUser,
    Role,
    RoleSet,
)
from accounts.schemas.health import HealthResponse
from accounts.schemas.users import UserPublic, UserWrite

__all__ = [
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "Role",
    "RoleSet",
    "UserPublic",
    "UserWrite",
]
