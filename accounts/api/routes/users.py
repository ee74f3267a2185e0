"""User CRUD endpoints. Signup is public; everything else goes through the auth gate."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from accounts.api.deps import (
    admin_only,
    get_app_settings,
    path_user_id,
    require_owner_or_admin,
)
from accounts.core.config import Settings
from accounts.core.database import get_db
from accounts.core.errors import NotFound
from accounts.schemas.auth import Identity
from accounts.schemas.users import UserPublic, UserWrite
from accounts.services import users as user_store

router = APIRouter()

USER_NOT_FOUND = "User not found."


@router.get("", response_model=list[UserPublic])
def list_users(
    _admin: Annotated[Identity, Depends(admin_only)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserPublic]:
    """List all users ordered by id (admin only)."""
    return [UserPublic.model_validate(u) for u in user_store.list_users(db)]


@router.get("/{user_id}", response_model=UserPublic)
def get_user(
    _identity: Annotated[Identity, Depends(require_owner_or_admin)],
    user_id: Annotated[int, Depends(path_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    """Fetch one user; callers may only read their own account unless admin."""
    user = user_store.get_user(db, user_id)
    if user is None:
        raise NotFound(USER_NOT_FOUND)
    return UserPublic.model_validate(user)


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserWrite,
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserPublic:
    """
    Public signup. Returns the new user with a Location header.

    New accounts get the default 'user' role. An email that is already
    registered is rejected and no second row is written.
    """
    user = user_store.create_user(db, body, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    response.headers["Location"] = request.url_for("get_user", user_id=str(user.id)).path
    return UserPublic.model_validate(user)


@router.put("/{user_id}", response_model=UserPublic)
def update_user(
    body: UserWrite,
    _identity: Annotated[Identity, Depends(require_owner_or_admin)],
    user_id: Annotated[int, Depends(path_user_id)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserPublic:
    """Replace username, email and password of an account (self or admin)."""
    user = user_store.update_user(
        db, user_id, body, bcrypt_rounds=settings.BCRYPT_ROUNDS
    )
    if user is None:
        raise NotFound(USER_NOT_FOUND)
    return UserPublic.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    _admin: Annotated[Identity, Depends(admin_only)],
    user_id: Annotated[int, Depends(path_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete an account (admin only)."""
    if not user_store.delete_user(db, user_id):
        raise NotFound(USER_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
