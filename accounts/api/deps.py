"""Auth gate and shared request dependencies.

The gate reads ``Authorization: Bearer <token>``, verifies the token with the
configured signing secret and hands the handler a typed ``Identity``. Role
requirements are a ``RoleSet``; the ownership rule is a separate dependency
applied after the gate on ``/users/{user_id}`` routes. No database lookups
happen here: the token alone decides.
"""

import logging
import re
from collections.abc import Callable
from typing import Annotated

import jwt
from fastapi import Depends, Header, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from accounts.core.config import Settings
from accounts.core.errors import BadRequest, Forbidden, InvalidToken, Unauthenticated
from accounts.core.security import decode_access_token
from accounts.schemas.auth import Identity, Role, RoleSet

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
ADMIN_ONLY: RoleSet = frozenset({Role.ADMIN})

_USER_ID_RE = re.compile(r"[0-9]+")
# users.id is a 32-bit INTEGER column.
INT32_MAX = 2**31 - 1

# Declares the bearer scheme in OpenAPI only; extract_bearer_token does the
# (case-sensitive) parsing.
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with (see create_app)."""
    return request.app.state.settings


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an Authorization header value or raise Unauthenticated."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthenticated("Authorization header must be 'Bearer <token>'.")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise Unauthenticated("Bearer token not provided.")
    return token


def verify_identity(token: str, settings: Settings) -> Identity:
    """Verify signature and expiry, then build the Identity from the claims."""
    try:
        payload = decode_access_token(token, settings)
    except jwt.ExpiredSignatureError as e:
        logger.info("Rejected expired token")
        raise InvalidToken() from e
    except jwt.PyJWTError as e:
        logger.info("Rejected token: %s", e)
        raise InvalidToken() from e

    try:
        subject = int(payload["sub"])
        role = Role(payload.get("role"))
    except (KeyError, TypeError, ValueError) as e:
        logger.info("Rejected token with malformed claims")
        raise InvalidToken("Invalid token payload.") from e
    if subject <= 0:
        raise InvalidToken("Invalid token payload.")
    return Identity(subject=subject, role=role)


def require_identity(roles: RoleSet | None = None) -> Callable[..., Identity]:
    """
    Build a dependency that authenticates the request.

    With ``roles`` set, an authenticated caller whose role is not a member is
    rejected with 403. Without it any valid token is accepted.
    """
    required = frozenset(roles) if roles is not None else None

    def gate(
        settings: Annotated[Settings, Depends(get_app_settings)],
        _credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
        authorization: Annotated[str | None, Header()] = None,
    ) -> Identity:
        token = extract_bearer_token(authorization)
        identity = verify_identity(token, settings)
        if required is not None and identity.role not in required:
            logger.info(
                "Role %s not in %s for user_id=%s",
                identity.role,
                sorted(required),
                identity.subject,
            )
            raise Forbidden("Role not authorized.")
        logger.debug("Access granted to user_id=%s role=%s", identity.subject, identity.role)
        return identity

    return gate


authenticated = require_identity()
admin_only = require_identity(ADMIN_ONLY)


def parse_user_id(raw: str) -> int:
    """Parse a path id; only decimal integers in 1..INT32_MAX are accepted."""
    if not _USER_ID_RE.fullmatch(raw):
        raise BadRequest("Invalid user id.")
    user_id = int(raw)
    if user_id <= 0 or user_id > INT32_MAX:
        raise BadRequest("Invalid user id.")
    return user_id


def path_user_id(user_id: Annotated[str, Path(description="User id")]) -> int:
    return parse_user_id(user_id)


def check_owner_or_admin(identity: Identity, user_id: int) -> None:
    """Allow admins and the account owner; raise Forbidden otherwise."""
    if identity.is_admin or identity.subject == user_id:
        return
    logger.info("user_id=%s denied access to user_id=%s", identity.subject, user_id)
    raise Forbidden("Not authorized for this user.")


def require_owner_or_admin(
    identity: Annotated[Identity, Depends(authenticated)],
    user_id: Annotated[int, Depends(path_user_id)],
) -> Identity:
    """Gate plus ownership rule for identity-scoped routes."""
    check_owner_or_admin(identity, user_id)
    return identity
