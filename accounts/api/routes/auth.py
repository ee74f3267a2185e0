"""Login endpoint: exchange email and password for a bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from accounts.api.deps import get_app_settings
from accounts.core.config import Settings
from accounts.core.database import get_db
from accounts.schemas.auth import LoginRequest, LoginResponse
from accounts.services.auth import authenticate

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT and the public user fields.
    Include the token in the Authorization header as: Bearer <token>

    401 for unknown email or wrong password (same message), 403 for a
    deactivated account, 500 if the server has no signing secret.
    """
    return authenticate(db, body, settings)
