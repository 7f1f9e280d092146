"""
Pydantic schemas for login and account management.
"""

from datetime import datetime
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)

from hisaab_kitaab.models.enums import UserRole


# bcrypt only hashes the first 72 bytes, and rejects anything longer
BCRYPT_MAX_BYTES = 72


def _fits_bcrypt(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(
            f"Password cannot be longer than {BCRYPT_MAX_BYTES} bytes"
        )
    return value


Password = Annotated[
    str,
    Field(min_length=6, max_length=BCRYPT_MAX_BYTES),
    AfterValidator(_fits_bcrypt),
]

CurrentPassword = Annotated[
    str,
    Field(min_length=1, max_length=BCRYPT_MAX_BYTES),
    AfterValidator(_fits_bcrypt),
]


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=100)
    password: Password

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=100)
    password: Password
    role: UserRole = UserRole.USER

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ChangePasswordRequest(BaseModel):
    current_password: CurrentPassword
    new_password: Password
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "ChangePasswordRequest":
        if self.confirm_password != self.new_password:
            raise ValueError("Passwords do not match")
        return self


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
