"""
Create a back-office admin (there is no admin signup UI). Run from project root:
  python -m intake.scripts.create_admin EMAIL PASSWORD NAME [role]
Example:
  python -m intake.scripts.create_admin ops@example.com your-secure-password "Ops Team" super_admin
"""
import argparse
import asyncio
import sys

from intake.core.config import get_settings
from intake.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from intake.schemas.records import Admin
from intake.services.ids import generate_id, utc_now_iso
from intake.services.validation import is_valid_email
from intake.storage import Storage, StoreError, build_storage


async def create_admin(storage: Storage, email: str, password: str, name: str, role: str) -> Admin | None:
    """Create the admin; None if the email is already taken."""
    existing = await storage.admins.find_one(lambda a: a.email == email)
    if existing is not None:
        return None
    return await storage.admins.create(
        Admin(
            id=generate_id(),
            email=email,
            password=hash_password(password),
            name=name,
            role=role,
            created_at=utc_now_iso(),
        )
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an HCX back-office admin.")
    parser.add_argument("email", help="Admin email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("name", help="Display name")
    parser.add_argument("role", nargs="?", default="admin", choices=["admin", "super_admin"])
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not is_valid_email(email):
        print("Invalid email format.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1
    name = args.name.strip()
    if not name:
        print("Name must be non-empty.", file=sys.stderr)
        return 1

    storage = build_storage(get_settings())
    try:
        admin = asyncio.run(create_admin(storage, email, args.password, name, args.role))
    except StoreError as e:
        print(f"Could not create admin: {e.message}", file=sys.stderr)
        return 1
    if admin is None:
        print(f"Admin '{email}' already exists.", file=sys.stderr)
        return 1
    print(f"Created admin '{email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
