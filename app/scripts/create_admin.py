"""
Bootstrap the first admin account and the default settings. Run from project root:
  python -m app.scripts.create_admin EMAIL PASSWORD [--first-name NAME] [--last-name NAME]
Example:
  python -m app.scripts.create_admin admin@example.org your-secure-password
"""
import argparse
import logging
import sys

from pydantic import EmailStr, TypeAdapter, ValidationError

from app.core.database import SessionLocal
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.services.accounts import ensure_admin, seed_default_settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an approved admin account.")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="AMIS RIM")
    parser.add_argument(
        "--skip-settings", action="store_true", help="Do not (re)write the default settings"
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    try:
        email = TypeAdapter(EmailStr).validate_python(args.email.strip())
    except ValidationError:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        profile, created = ensure_admin(
            db, email, args.password, first_name=args.first_name, last_name=args.last_name
        )
        if created:
            print(f"Created admin '{email}' (profile {profile.id}).")
        else:
            print(f"User '{email}' already exists; left unchanged.", file=sys.stderr)
        if not args.skip_settings:
            count = seed_default_settings(db)
            print(f"Wrote {count} default settings.")
        return 0 if created else 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
