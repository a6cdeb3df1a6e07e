"""
Create an already-verified user (e.g. an operator account). Run from project root:
  python -m lynkai.scripts.create_user USERNAME EMAIL PASSWORD
Example:
  python -m lynkai.scripts.create_user admin admin@example.com your-secure-password
"""
import argparse
import sys

from lynkai.core.database import session_scope
from lynkai.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    PasswordHasher,
)
from lynkai.services.credential_store import CredentialStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a verified user without the email verification round trip."
    )
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    args = parser.parse_args(argv)

    username = args.username.strip()
    email = args.email.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1
    if "@" in username:
        print("Username must not contain '@'.", file=sys.stderr)
        return 1
    if "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    with session_scope() as db:
        users = CredentialStore(db)
        if users.exists(username, email):
            print(f"User '{username}' or email '{email}' already exists.", file=sys.stderr)
            return 1
        user = users.create(username, email, PasswordHasher().hash(args.password))
        users.mark_verified(user.id)
        db.commit()
    print(f"Created verified user '{username}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
