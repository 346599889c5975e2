"""
Create a user (e.g. first admin). Run from project root:
  python -m rolegate.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m rolegate.scripts.create_user admin your-secure-password Admin
"""
import argparse
import logging
import sys

from rolegate.core.database import SessionLocal
from rolegate.core.errors import RolegateError
from rolegate.core.roles import Role
from rolegate.core.security import get_token_issuer
from rolegate.services.auth_service import AuthService
from rolegate.services.credential_store import CredentialStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Rolegate user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        service = AuthService(CredentialStore(db), get_token_issuer())
        user = service.register(args.username, args.password, args.role)
    except RolegateError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
