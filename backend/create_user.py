"""Provision a medical staff or admin account from the command line.

Neither role can sign up over HTTP, so the first admin has to be created here.

Usage:
    python -m backend.create_user --role admin --name Ada --email ada@example.com --password secret --dob 1990-01-01
"""
import argparse
import sys

from backend.core.config import get_settings
from backend.core.exceptions import AppError
from backend.database import Base, SessionLocal, engine
from backend.services.authenticator import Authenticator
from backend.store import CredentialStore, Role

PROVISIONABLE_ROLES = (Role.MEDICAL_STAFF.value, Role.ADMIN.value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--role", choices=PROVISIONABLE_ROLES, required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--dob", required=True, help="Date of birth, YYYY-MM-DD")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        authenticator = Authenticator(CredentialStore(db), settings)
        user_id = authenticator.provision(Role(args.role), args.name, args.email, args.password, args.dob)
    except AppError as exc:
        print(f"Could not create {args.role}: {exc.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created {args.role} {user_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
