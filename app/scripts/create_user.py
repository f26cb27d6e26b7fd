"""
Create a user (e.g. the first admin) or promote an existing one. Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD [NAME] [--role admin] [--promote]
Examples:
  python -m app.scripts.create_user owner@example.com your-secure-password "Shop Owner" --role admin
  python -m app.scripts.create_user owner@example.com ignored --role admin --promote
"""
import argparse
import logging
import sys

from app.core.config import settings
from app.core.database import SessionLocal
from app.core.errors import ValidationError
from app.core.security import PasswordHasher, validate_password
from app.models.user import Role
from app.repositories import AccountRepository, StorageError, StorageErrorKind

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a SOCIAL SH user outside the sign-up flow.")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password (8 characters to 72 bytes)")
    parser.add_argument("name", nargs="?", default="", help="Display name")
    parser.add_argument("--role", default=Role.USER.value, choices=[r.value for r in Role])
    parser.add_argument(
        "--promote",
        action="store_true",
        help="If the email already exists, set its role instead of failing (password is ignored)",
    )
    return parser


def run(accounts: AccountRepository, hasher: PasswordHasher, args: argparse.Namespace) -> int:
    email = args.email.strip().lower()
    if not email or "@" not in email or len(email) > 255:
        print("Invalid email.", file=sys.stderr)
        return 1
    role = Role(args.role)

    existing = accounts.get_by_email(email)
    if existing is not None:
        if not args.promote:
            print(f"User '{email}' already exists. Use --promote to change its role.", file=sys.stderr)
            return 1
        accounts.set_role(existing.id, role)
        print(f"Set role of '{email}' to '{role.value}'.")
        return 0

    try:
        validate_password(args.password)
    except ValidationError as e:
        print(e.message, file=sys.stderr)
        return 1
    try:
        accounts.create_user(email, args.name.strip(), hasher.hash(args.password), role)
    except StorageError as e:
        if e.kind is StorageErrorKind.CONFLICT:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        raise
    print(f"Created user '{email}' with role '{role.value}'.")
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    db = SessionLocal()
    try:
        return run(AccountRepository(db), PasswordHasher(settings.BCRYPT_ROUNDS), args)
    except StorageError:
        logger.exception("Could not write the user")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
