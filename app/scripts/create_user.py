"""
Create a user (e.g. the first Admin, since signup only grants User). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password Admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.errors import ConflictError
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
)
from app.repositories.users import UserRepository
from app.services.ownership import ROLE_ADMIN, ROLE_USER


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a CV Generator user.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=[ROLE_USER, ROLE_ADMIN])
    args = parser.parse_args(argv)

    username = args.username.strip()
    email = args.email.strip()
    if not USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        users = UserRepository(db)
        password_hash = hash_password(args.password)
        try:
            if args.role == ROLE_ADMIN:
                # Idempotent: an existing account with this email is left as is.
                user = users.ensure_admin(username, email, password_hash)
            else:
                user = users.create(username, email, password_hash)
        except ConflictError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"User '{user.username}' (id={user.id}) has roles {user.roles}.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
