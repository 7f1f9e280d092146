"""
JWT access tokens.

Tokens are HS256-signed with JWT_SECRET and carry the user id
in "sub". There is no revocation: a token is valid until it
expires (JWT_EXPIRE_DAYS).
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from hisaab_kitaab.config import get_settings
from hisaab_kitaab.errors import AuthenticationError


def create_access_token(user_id: int) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=settings.JWT_EXPIRE_DAYS),
    }
    return jwt.encode(
        payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM
    )


def decode_access_token(token: str) -> int:
    """
    Validate a token and return the user id it was issued to.

    Raises AuthenticationError if the token is malformed, signed
    with another key, expired, or has no usable subject.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError:
        raise AuthenticationError("Not authorized to access this route") from None

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise AuthenticationError("Not authorized to access this route")
    return int(subject)
