"""
Create a user (e.g. first admin) through the same signup workflow as the API. Run from project root:
  python -m app.scripts.create_user FIRSTNAME LASTNAME USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user Ada Lovelace ada ada@example.com your-secure-password admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.repositories.roles import RoleRepository
from app.repositories.tokens import RevokedTokenRepository
from app.repositories.users import UserRepository
from app.services.errors import UserServiceError
from app.services.tokens import TokenService
from app.services.users import UserController


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Userbase user (bootstrap an admin).")
    parser.add_argument("firstname")
    parser.add_argument("lastname")
    parser.add_argument("username")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("role", nargs="?", default="user", help="Role title (default: user)")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        controller = UserController(
            users=UserRepository(db),
            roles=RoleRepository(db),
            tokens=TokenService(RevokedTokenRepository(db)),
        )
        try:
            controller.signup(
                {
                    "firstname": args.firstname,
                    "lastname": args.lastname,
                    "username": args.username,
                    "email": args.email,
                    "password": args.password,
                    "role": args.role,
                }
            )
        except UserServiceError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created user '{args.email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
