"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.errors import IdentityError
from app.models import USER_ROLES
from app.services.identity import IdentityService
from app.services.user_store import UserStoreGateway


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an identity-service user.")
    parser.add_argument("username", help="Username (unique)")
    parser.add_argument("email", help="Email (unique)")
    parser.add_argument("password", help="Password")
    parser.add_argument("role", nargs="?", default="user", choices=list(USER_ROLES))
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        service = IdentityService(UserStoreGateway(db))
        profile = service.register(args.username.strip(), args.email.strip(), args.password)
        if args.role != profile.role:
            profile = service.update_profile(
                profile.id, profile.username, profile.email, args.role
            )
    except IdentityError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created user '{profile.username}' (id {profile.id}) with role '{profile.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
