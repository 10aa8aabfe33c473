"""
Create a user (e.g. the first admin) through the registration flow. Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [--name NAME] [--role ROLE]
Example:
  python -m app.scripts.create_user admin your-secure-password --role Admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.schemas.auth import RegisterRequest
from app.services.auth import AuthError, register

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create a storefront user account.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("--name", default=None, help="Display name")
    parser.add_argument(
        "--role",
        default=None,
        help=f"Role name; created if missing (default: {settings.DEFAULT_ROLE})",
    )
    args = parser.parse_args(argv)

    try:
        body = RegisterRequest(
            username=args.username,
            password=args.password,
            name=args.name,
            role=args.role,
        )
    except ValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = register(db, body, settings)
    except AuthError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created user '%s' (id=%s) with role '%s'.", user.username, user.id, user.role)
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    sys.exit(main())
