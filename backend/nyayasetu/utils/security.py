"""Password hashing and access tokens"""
import hmac
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext

from ..config import get_settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def is_password_hash(value: str) -> bool:
    return bool(value) and pwd_context.identify(value) is not None


def verify_password(plain_password: str, stored_password: str, *, allow_plaintext: bool = False) -> bool:
    """Check a password against its stored hash.

    With ``allow_plaintext`` a stored value that is not a recognised hash is
    compared directly (legacy demo accounts, development only).
    """
    if not stored_password:
        return False
    if not is_password_hash(stored_password):
        if allow_plaintext:
            return hmac.compare_digest(plain_password.encode("utf-8"), stored_password.encode("utf-8"))
        return False
    try:
        return pwd_context.verify(plain_password, stored_password)
    except (ValueError, TypeError):
        return False


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    to_encode = dict(data)
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire, "jti": uuid.uuid4().hex})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> dict[str, Any] | None:
    """Decoded claims, or None for an invalid or expired token"""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.PyJWTError:
        return None
