"""
Tremu Backend — Password Hashing & Access Tokens
==================================================

What:  bcrypt password hashing and HS256 JWT issue/verify helpers.
Who:   AuthService (register/login) and the auth gate in dependencies.py.

Token claims:
    sub  user id as a string (PyJWT requires ``sub`` to be a string)
    iat  issue time
    exp  iat + JWT_EXPIRE_MINUTES
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from tremu.config import settings
from tremu.exceptions import AuthenticationError

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of ``password`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {"sub": str(user_id), "iat": now, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """
    Verify signature and expiry, returning the user id from ``sub``.

    Raises:
        AuthenticationError: the token is expired, tampered with, or does
            not carry a numeric subject. The PyJWT message is kept in the
            error context so the response can report it.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError as e:
        raise AuthenticationError(
            message="Invalid token",
            context={"original_error": str(e)},
        ) from e

    try:
        return int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise AuthenticationError(
            message="Invalid token",
            context={"original_error": "Token subject is not a user id"},
        ) from e
