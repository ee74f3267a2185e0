"""Request/response schemas for user CRUD endpoints."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from accounts.core.security import (
    DISPLAY_NAME_MAX_LEN,
    DISPLAY_NAME_MIN_LEN,
    PASSWORD_MIN_LEN,
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class UserWrite(BaseModel):
    """
    Body for signup (POST /users) and full replacement (PUT /users/{id}).

    All three fields are required; values are trimmed before validation.
    """

    username: StrictStr = Field(..., description="Display name (2-50 chars)")
    email: StrictStr = Field(..., description="Email address")
    password: StrictStr = Field(..., description="Password (at least 8 chars)")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not (DISPLAY_NAME_MIN_LEN <= len(v) <= DISPLAY_NAME_MAX_LEN):
            raise ValueError(
                f"username must be {DISPLAY_NAME_MIN_LEN}-{DISPLAY_NAME_MAX_LEN} characters"
            )
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not EMAIL_RE.match(v):
            raise ValueError("email must look like local@domain.tld")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        v = v.strip()
        if len(v) < PASSWORD_MIN_LEN:
            raise ValueError(f"password must be at least {PASSWORD_MIN_LEN} characters")
        return v


class UserPublic(BaseModel):
    """User projection returned to clients (no password hash, no role)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    display_name: str
    email: str
    created_at: datetime
