"""
Create a login for a fresh deployment.

    python -m hisaab_kitaab.seed --email admin@example.com \
        --name Admin --password secret123 --role admin

Creates any missing tables first. Running it again for an email
that already exists leaves that user untouched.
"""

import argparse
import logging

from sqlalchemy.orm import Session

from hisaab_kitaab.config import get_settings
from hisaab_kitaab.logging_config import setup_logging
from hisaab_kitaab.models import Base, User, UserRole
from hisaab_kitaab.models.base import SessionLocal, engine
from hisaab_kitaab.models.repository import Repository, RetryPolicy
from hisaab_kitaab.schemas.auth import UserCreate
from hisaab_kitaab.services.auth_service import AuthService

logger = logging.getLogger(__name__)


def seed_user(db: Session, request: UserCreate) -> tuple[User, bool]:
    """Return (user, created). An existing user is returned as-is."""
    repo = Repository(db, RetryPolicy.from_settings(get_settings()))
    service = AuthService(repo)

    existing = service.find_by_email(request.email)
    if existing is not None:
        logger.info("User already exists", extra={"user_id": existing.id})
        return existing, False

    user = service.create_user(request)
    repo.commit()
    return user, True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Hisaab Kitaab user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument(
        "--role",
        choices=[r.value for r in UserRole],
        default=UserRole.USER.value,
    )
    args = parser.parse_args(argv)

    setup_logging(get_settings().LOG_LEVEL)
    Base.metadata.create_all(bind=engine)

    request = UserCreate(
        name=args.name,
        email=args.email,
        password=args.password,
        role=UserRole(args.role),
    )
    db = SessionLocal()
    try:
        user, created = seed_user(db, request)
        verb = "Created" if created else "Found existing"
        print(f"{verb} user {user.email} (id={user.id})")
    finally:
        db.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
