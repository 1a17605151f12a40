"""
Create a user with any role (e.g. the first admin). Run from project root:
  python -m traintrack.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m traintrack.scripts.create_user "Ada Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import EmailStr, TypeAdapter, ValidationError

from traintrack.core.config import settings
from traintrack.core.database import SessionLocal
from traintrack.core.logging_setup import configure_logging
from traintrack.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from traintrack.models import Role, User
from traintrack.schemas.validators import normalize_email
from traintrack.services.auth import find_user_by_email
from traintrack.services.permissions import Role as RoleName
from traintrack.services.seed import seed_roles

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a TrainTrack user with any role.")
    parser.add_argument("name", help="Display name (1-255 chars)")
    parser.add_argument("email", help="Login email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role", nargs="?", default=RoleName.USER.value, choices=[r.value for r in RoleName]
    )
    args = parser.parse_args()
    configure_logging(settings)

    name = args.name.strip()
    if not name or len(name) > 255:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1
    try:
        email = TypeAdapter(EmailStr).validate_python(normalize_email(args.email))
    except ValidationError:
        print(f"Invalid email address: {args.email}", file=sys.stderr)
        return 1

    with SessionLocal() as db:
        if find_user_by_email(db, email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        seed_roles(db)
        role = db.query(Role).filter(Role.name == args.role).one()
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(args.password, settings.BCRYPT_ROUNDS),
            role_id=role.id,
        )
        db.add(user)
        db.commit()
        logger.info("Created user_id=%s with role '%s'", user.id, args.role)
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
