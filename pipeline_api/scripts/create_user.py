"""
Create a user (e.g. first admin) so someone can log in. Run from project root:
  python -m pipeline_api.scripts.create_user NAME EMAIL PASSWORD BIRTHDATE [role]
Example:
  python -m pipeline_api.scripts.create_user "Ada Admin" ada@example.com 'S3cure!pass' 1990-01-31 admin
"""
import argparse
import logging
import sys
from datetime import date

from dotenv import load_dotenv

from pipeline_api.core.config import load_settings
from pipeline_api.core.database import build_session_factory, create_db_engine
from pipeline_api.core.logging import configure_logging
from pipeline_api.core.security import hash_password
from pipeline_api.core.validation import CredentialError, validate_email, validate_password
from pipeline_api.models.user import Role
from pipeline_api.repositories.errors import RepositoryError
from pipeline_api.repositories.users import UserRepository

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a pipeline user (no signup without a token).")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password (8+ chars, digit, upper, lower, special)")
    parser.add_argument("birthdate", type=date.fromisoformat, help="YYYY-MM-DD")
    parser.add_argument(
        "role", nargs="?", default=Role.STANDARD.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args(argv)

    load_dotenv()
    settings = load_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        validate_password(args.password)
        email = validate_email(args.email)
    except CredentialError as e:
        print(e.message, file=sys.stderr)
        return 1

    db = build_session_factory(create_db_engine(settings))()
    try:
        repo = UserRepository(db)
        if repo.get_by_email(email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = repo.create(
            {
                "name": args.name.strip(),
                "email": email,
                "role": args.role,
                "birthdate": args.birthdate,
                "password": hash_password(args.password.strip()),
            }
        )
        print(f"Created user '{email}' ({user.uuid}) with role '{args.role}'.")
        return 0
    except RepositoryError as e:
        logger.error("Could not create user: %s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
