"""Password hashing and JWT helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from .config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenType(str, Enum):
    """Enumerates supported JWT token types."""

    ACCESS = "access"


@dataclass(slots=True)
class GeneratedToken:
    """A signed token together with its expiry."""

    token: str
    expires_at: datetime
    jti: str

    @property
    def max_age(self) -> int:
        """Seconds until expiry, suitable for a cookie ``Max-Age``."""

        remaining = self.expires_at - datetime.now(timezone.utc)
        return max(int(remaining.total_seconds()), 0)


def get_password_hash(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hashed counterpart."""

    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    *,
    subject: str,
    email: str,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> GeneratedToken:
    """Sign an access token binding ``subject`` (the user id) and ``email``."""

    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = now + expires_delta
    payload: dict[str, Any] = {
        "sub": str(subject),
        "email": email,
        "iat": now,
        "exp": expire,
        "type": TokenType.ACCESS.value,
        "jti": uuid4().hex,
    }
    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return GeneratedToken(token=token, expires_at=expire, jti=payload["jti"])


def decode_token(*, token: str, secret: str, algorithm: str) -> dict[str, Any]:
    """Decode a JWT token and return its payload.

    Raises ``ExpiredSignatureError`` for tokens past ``exp`` and ``JWTError``
    for anything malformed or wrongly signed.
    """

    return jwt.decode(token, secret, algorithms=[algorithm])


__all__ = [
    "ExpiredSignatureError",
    "GeneratedToken",
    "JWTError",
    "TokenType",
    "create_access_token",
    "decode_token",
    "get_password_hash",
    "verify_password",
]
