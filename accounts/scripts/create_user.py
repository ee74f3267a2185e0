"""
Create a user (e.g. the first admin; signup always creates role 'user'). Run from project root:
  python -m accounts.scripts.create_user EMAIL DISPLAY_NAME PASSWORD [role]
Example:
  python -m accounts.scripts.create_user admin@example.com Admin your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from accounts.core.config import get_settings
from accounts.core.database import build_engine, build_session_factory
from accounts.core.errors import Conflict
from accounts.core.logging_config import configure_logging
from accounts.schemas.auth import Role
from accounts.schemas.users import UserWrite
from accounts.services.users import create_user

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account (bypasses public signup).")
    parser.add_argument("email", help="Email address (stored lowercase)")
    parser.add_argument("display_name", help="Display name (2-50 chars)")
    parser.add_argument("password", help="Password (at least 8 chars)")
    parser.add_argument("role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        data = UserWrite(username=args.display_name, email=args.email, password=args.password)
    except ValidationError as e:
        for err in e.errors():
            print(f"Invalid {err['loc'][0]}: {err['msg']}", file=sys.stderr)
        return 1

    db = build_session_factory(build_engine(settings))()
    try:
        user = create_user(db, data, bcrypt_rounds=settings.BCRYPT_ROUNDS, role=Role(args.role))
    except Conflict:
        print(f"User '{data.email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' (id={user.id}) with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
