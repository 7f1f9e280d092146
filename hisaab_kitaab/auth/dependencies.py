"""
FastAPI dependency: get_current_user.

Every protected router declares
    current_user: User = Depends(get_current_user)
or lists it in its dependencies.
"""

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from hisaab_kitaab.auth.jwt_handler import decode_access_token
from hisaab_kitaab.errors import AuthenticationError
from hisaab_kitaab.models.repository import Repository, get_repository
from hisaab_kitaab.models.user import User

# tokenUrl only feeds the "Authorize" button in the OpenAPI docs
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    repo: Repository = Depends(get_repository),
) -> User:
    """Resolve the Bearer token to an active user, or fail with 401."""
    user_id = decode_access_token(token)

    user = repo.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthenticationError("Account is deactivated")
    return user
