"""
Security utilities - password hashing and access tokens
"""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from usuarios_api.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hash a plaintext password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a plaintext password against a stored hash.

    Returns False for malformed or unknown hash formats.
    """
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def generate_token_id() -> str:
    """Random identifier used as the ``jti`` claim of a token."""
    return secrets.token_hex(32)


def hash_token_id(token_id: str) -> str:
    """SHA-256 digest of a token identifier, as stored in the database."""
    return hashlib.sha256(token_id.encode("utf-8")).hexdigest()


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed JWT.

    Args:
        data: Claims to encode (``sub`` is coerced to str)
        expires_delta: Optional lifetime; without it the token carries no ``exp``

    Returns:
        Encoded token
    """
    to_encode = data.copy()
    if "sub" in to_encode:
        to_encode["sub"] = str(to_encode["sub"])

    now = datetime.now(timezone.utc)
    to_encode["iat"] = int(now.timestamp())
    if expires_delta is not None:
        to_encode["exp"] = int((now + expires_delta).timestamp())

    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a JWT.

    Returns:
        Claims, or None if the signature, format or expiry is invalid
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
