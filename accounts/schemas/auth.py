"""Request/response schemas for auth endpoints and the identity they produce."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class Role(StrEnum):
    """Account roles; 'user' is the store default for new signups."""

    USER = "user"
    ADMIN = "admin"


RoleSet = frozenset[Role]


@dataclass(frozen=True)
class Identity:
    """Caller identity decoded from a verified bearer token; lives for one request."""

    subject: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class LoginRequest(BaseModel):
    """Credentials for login. Email is trimmed and lowercased, password trimmed."""

    email: StrictStr = Field(..., description="Account email")
    password: StrictStr = Field(..., description="Password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("email must not be empty")
        return v

    @field_validator("password")
    @classmethod
    def normalize_password(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("password must not be empty")
        return v


class LoginUser(BaseModel):
    """Public user fields returned alongside a token."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    display_name: str
    role: Role


class LoginResponse(BaseModel):
    """Signed access token plus the authenticated user's public projection."""

    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    user: LoginUser
