"""User store: parameterized CRUD over the users table via SQLAlchemy."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from accounts.core.errors import Conflict
from accounts.core.security import hash_password
from accounts.models import User
from accounts.schemas.auth import Role
from accounts.schemas.users import UserWrite

logger = logging.getLogger(__name__)

ALREADY_REGISTERED = "Username or email already registered."


def list_users(db: Session) -> list[User]:
    """All users ordered by ascending id."""
    return list(db.scalars(select(User).order_by(User.id)))


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Look up by email; callers pass the already-normalized (lowercase) form."""
    return db.scalars(select(User).where(User.email == email)).first()


def _commit_unique(db: Session, user_id: int | None) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Unique constraint violation for user_id=%s: %s", user_id, e.orig)
        raise Conflict(ALREADY_REGISTERED) from e


def create_user(
    db: Session, data: UserWrite, bcrypt_rounds: int = 12, role: Role | None = None
) -> User:
    """
    Insert a new account. Without ``role`` the store default (user) applies.

    Raises Conflict if the email is already registered; no row is written.
    """
    user = User(
        email=data.email,
        password_hash=hash_password(data.password, rounds=bcrypt_rounds),
        display_name=data.username,
    )
    if role is not None:
        user.role = role.value
    db.add(user)
    _commit_unique(db, None)
    db.refresh(user)
    logger.info("Registered user_id=%s", user.id)
    return user


def update_user(
    db: Session, user_id: int, data: UserWrite, bcrypt_rounds: int = 12
) -> User | None:
    """
    Replace display name, email and password of an existing account.

    The password is always re-hashed. Returns None if no user has that id.
    """
    user = db.get(User, user_id)
    if user is None:
        return None
    user.email = data.email
    user.display_name = data.username
    user.password_hash = hash_password(data.password, rounds=bcrypt_rounds)
    _commit_unique(db, user_id)
    db.refresh(user)
    logger.info("Updated user_id=%s", user_id)
    return user


def delete_user(db: Session, user_id: int) -> bool:
    """Delete by id. Returns False if no row was affected."""
    deleted = db.execute(delete(User).where(User.id == user_id)).rowcount
    db.commit()
    if deleted:
        logger.info("Deleted user_id=%s", user_id)
    return bool(deleted)
