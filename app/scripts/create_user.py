"""
Create a user (e.g. the first administrator). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD FIRST_NAME LAST_NAME [--admin]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password Ada Admin --admin

--admin creates a role holding every capability and assigns it to the new user.
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.core.errors import AppError
from app.core.security import (
    EMAIL_MAX_LEN,
    EMAIL_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    TokenIssuer,
)
from app.services.auth import AuthService
from app.services.credential_store import SqlCredentialStore
from app.services.permissions import PERMISSION_FLAGS

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a platform user (bootstrap, no API call).")
    parser.add_argument("email", help=f"Email ({EMAIL_MIN_LEN}-{EMAIL_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("first_name")
    parser.add_argument("last_name")
    parser.add_argument("--admin", action="store_true", help="Assign a role with every capability")
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not (EMAIL_MIN_LEN <= len(email) <= EMAIL_MAX_LEN):
        print("Invalid email length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        # No tokens are issued here, so the signing secrets are not needed.
        service = AuthService(SqlCredentialStore(db), TokenIssuer(None, None))
        if service.store.find_user_by_email(email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        role_id = None
        if args.admin:
            role = service.create_role("admin", **{attr: True for _, attr in PERMISSION_FLAGS})
            role_id = role.id
        user = service.register(
            first_name=args.first_name,
            last_name=args.last_name,
            email=email,
            password=args.password,
            role_id=role_id,
        )
        print(f"Created user '{user.email}' with id {user.id}.")
        return 0
    except AppError as e:
        logger.error("Could not create user: %s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
