"""Password hashing with bcrypt."""

import bcrypt


def hash_password(plain: str) -> str:
    """Hash a plain-text password. Returns a utf-8 hash string."""
    hashed: bytes = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
