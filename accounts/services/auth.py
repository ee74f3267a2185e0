"""Login flow: verify credentials against the user store and issue a token."""

import logging

from sqlalchemy.orm import Session

from accounts.core.config import Settings
from accounts.core.errors import ConfigurationError, Forbidden, Unauthenticated
from accounts.core.security import create_access_token, verify_password
from accounts.schemas.auth import LoginRequest, LoginResponse, LoginUser
from accounts.services.users import get_user_by_email

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password so accounts cannot be enumerated.
INVALID_CREDENTIALS = "Invalid email or password."


def authenticate(db: Session, body: LoginRequest, settings: Settings) -> LoginResponse:
    """
    Check email/password and return a signed token with the public user fields.

    Raises Unauthenticated for bad credentials, Forbidden for a deactivated
    account and ConfigurationError when no signing secret is configured.
    """
    user = get_user_by_email(db, body.email)
    if user is None:
        raise Unauthenticated(INVALID_CREDENTIALS)
    if settings.JWT_SECRET is None:
        logger.error("Login attempted but JWT_SECRET is not set")
        raise ConfigurationError()
    if not user.is_active:
        logger.info("Login refused for inactive user_id=%s", user.id)
        raise Forbidden("Account is deactivated.")
    if not verify_password(body.password, user.password_hash):
        raise Unauthenticated(INVALID_CREDENTIALS)

    token = create_access_token(sub=user.id, role=user.role, settings=settings)
    logger.info("Issued token for user_id=%s", user.id)
    return LoginResponse(token=token, user=LoginUser.model_validate(user))
