"""Security utilities: bcrypt password hashing and JWT access tokens."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import get_settings

password_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidTokenError(Exception):
    """Token is malformed, badly signed, expired or missing required claims."""


def hash_password(plain: str) -> str:
    return password_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return password_context.verify(plain, hashed)


def create_access_token(user_id: int, email: str, expires_delta: timedelta | None = None) -> str:
    """Sign a token carrying the user id (``sub``) and email, valid until ``exp``."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.access_token_expire_hours)
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> tuple[int, str]:
    """
    Validate signature and expiry and return ``(user_id, email)``.
    Raises InvalidTokenError on any failure.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
    sub = payload.get("sub")
    email = payload.get("email")
    if sub is None or email is None:
        raise InvalidTokenError("token is missing identity claims")
    try:
        return int(sub), email
    except (TypeError, ValueError) as exc:
        raise InvalidTokenError("token subject is not a user id") from exc
