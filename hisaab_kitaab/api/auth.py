"""
Auth API endpoints.
"""

from fastapi import APIRouter, Depends

from hisaab_kitaab.auth.dependencies import get_current_user
from hisaab_kitaab.models.repository import Repository, get_repository
from hisaab_kitaab.models.user import User
from hisaab_kitaab.services.auth_service import AuthService
from hisaab_kitaab.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    TokenResponse,
    UserResponse,
)
from hisaab_kitaab.schemas.common import MessageResponse

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    repo: Repository = Depends(get_repository),
):
    """Exchange email and password for a Bearer token."""
    service = AuthService(repo)
    user, token = service.login(request.email, request.password)
    return TokenResponse(
        access_token=token,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    """Get the logged-in user's profile."""
    return current_user


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    repo: Repository = Depends(get_repository),
):
    service = AuthService(repo)
    service.change_password(
        current_user, request.current_password, request.new_password
    )
    repo.commit()
    return MessageResponse(message="Password changed successfully")
