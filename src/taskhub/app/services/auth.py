"""Authentication workflows: registration, login and token verification."""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError

from ..core.config import Settings
from ..core.security import (
    ExpiredSignatureError,
    GeneratedToken,
    JWTError,
    TokenType,
    create_access_token,
    decode_token,
    verify_password,
)
from ..errors import AuthenticationError, ConflictError, UnclassifiedError
from ..models import User
from ..schemas.auth import TokenPayload
from .users import UserService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


class AuthService:
    """Credential checks and token issuance for the API."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._user_service = UserService()

    async def register_user(self, *, name: str, email: str, password: str) -> User:
        existing = await self._user_service.get_user_by_email(email)
        if existing is not None:
            raise ConflictError("Email already registered.", field="email")
        user = await self._user_service.create_user(name=name, email=email, password=password)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def authenticate_user(self, email: str, password: str) -> User:
        """Return the user for valid credentials.

        Unknown email and wrong password produce the same error.
        """
        user = await self._user_service.get_user_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            logger.info("Rejected login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
        return user

    def issue_token(self, user: User) -> GeneratedToken:
        if user.id is None:
            raise UnclassifiedError("User must be persisted before issuing tokens.")
        return create_access_token(subject=str(user.id), email=user.email, settings=self._settings)

    def decode_access_token(self, token: str | None) -> TokenPayload:
        """Verify ``token`` and return its payload.

        Absent, malformed and expired tokens each fail with their own message.
        """
        if not token:
            raise AuthenticationError("Authentication required.")
        try:
            raw_payload = decode_token(
                token=token,
                secret=self._settings.jwt_secret_key,
                algorithm=self._settings.jwt_algorithm,
            )
        except ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired.") from exc
        except JWTError as exc:
            raise AuthenticationError("Invalid token.") from exc

        try:
            payload = TokenPayload.model_validate(raw_payload)
        except PydanticValidationError as exc:
            raise AuthenticationError("Invalid token.") from exc
        if payload.type is not TokenType.ACCESS:
            raise AuthenticationError("Invalid token.")
        return payload

    async def resolve_user(self, token: str | None) -> User:
        """Return the user a valid token was issued to."""
        payload = self.decode_access_token(token)
        user = await self._user_service.get_user(payload.sub)
        if user is None:
            raise AuthenticationError("User not found.")
        return user


__all__ = ["AuthService", "INVALID_CREDENTIALS_MESSAGE"]
