"""Schemas describing authentication payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..core.security import TokenType
from .common import CamelModel, strip_text
from .user import UserPublic


class SignupRequest(CamelModel):
    """Incoming payload for registering a new user."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Ada Lovelace", "email": "ada@example.com", "password": "secret1"}
        }
    )

    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return strip_text(value)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)


class AuthResponse(CamelModel):
    """Token and user returned after signup or login."""

    message: str
    token: str
    user: UserPublic


class CurrentUserResponse(CamelModel):
    user: UserPublic


class TokenPayload(BaseModel):
    """Validated JWT payload."""

    model_config = ConfigDict(extra="ignore")

    sub: str
    email: str
    exp: datetime
    iat: datetime
    jti: str
    type: TokenType


__all__ = [
    "AuthResponse",
    "CurrentUserResponse",
    "LoginRequest",
    "SignupRequest",
    "TokenPayload",
]
