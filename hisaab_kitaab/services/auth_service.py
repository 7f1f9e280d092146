"""
Auth service: users, logins and passwords.
"""

import logging

from sqlalchemy import select

from hisaab_kitaab.auth.jwt_handler import create_access_token
from hisaab_kitaab.auth.password import hash_password, verify_password
from hisaab_kitaab.errors import AuthenticationError, NotFoundError, ValidationError
from hisaab_kitaab.models.repository import Repository
from hisaab_kitaab.models.user import User
from hisaab_kitaab.schemas.auth import UserCreate

logger = logging.getLogger(__name__)

# Shared by unknown-email and wrong-password failures
INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:

    def __init__(self, repo: Repository):
        self.repo = repo

    def find_by_email(self, email: str) -> User | None:
        users = self.repo.scalars(
            select(User).where(User.email == email.strip().lower())
        )
        return users[0] if users else None

    def create_user(self, request: UserCreate) -> User:
        """Create a user. Raises ValidationError if the email is taken."""
        if self.find_by_email(request.email):
            raise ValidationError(
                f"User with email '{request.email}' already exists"
            )

        user = User(
            name=request.name,
            email=request.email,
            password_hash=hash_password(request.password),
            role=request.role,
        )
        self.repo.add(user)
        self.repo.flush()
        logger.info("User created", extra={"user_id": user.id})
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not user.is_active:
            raise AuthenticationError(
                "Account is deactivated. Please contact administrator."
            )
        return user

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Authenticate and issue an access token."""
        user = self.authenticate(email, password)
        logger.info("User logged in", extra={"user_id": user.id})
        return user, create_access_token(user.id)

    def change_password(
        self, user: User, current_password: str, new_password: str
    ) -> None:
        if not verify_password(current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect")
        user.password_hash = hash_password(new_password)
        self.repo.flush()
        logger.info("Password changed", extra={"user_id": user.id})

    def get_user(self, user_id: int) -> User:
        user = self.repo.get(User, user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user
