"""
Password hashing (Argon2 via passlib) and bearer tokens (JWT via python-jose).

Tokens carry the user id in "sub" plus issue and expiry times. Nothing
else about the user is embedded: ownership is always resolved from the
database on each request.
"""

import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings

# deprecated="auto" keeps old hashes verifying if the scheme list changes
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: uuid.UUID, expires_delta: timedelta | None = None) -> str:
    """
    Issue a signed token for the user.

    Args:
        user_id: Owner the token authenticates.
        expires_delta: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verify a token and return the user id it was issued for.

    Raises:
        JWTError: If the token is expired, tampered with, or has no usable subject.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    subject = payload.get("sub")
    if subject is None:
        raise JWTError("Token has no subject")
    try:
        return uuid.UUID(subject)
    except ValueError as exc:
        raise JWTError("Token subject is not a user id") from exc
