"""Reusable FastAPI dependencies."""

from __future__ import annotations

from typing import Annotated

from beanie import PydanticObjectId
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .core.config import Settings, get_settings
from .core.context import bind_user_id
from .errors import UnclassifiedError
from .models import User
from .schemas.auth import TokenPayload
from .services import AuthService

SettingsDependency = Annotated[Settings, Depends(get_settings)]

_bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    request: Request,
    settings: Settings,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    """Return the session token: the auth cookie wins over an ``Authorization`` header."""

    cookie_token = request.cookies.get(settings.auth_cookie_name)
    if cookie_token:
        return cookie_token
    if credentials is not None and credentials.scheme.lower() == "bearer":
        return credentials.credentials or None
    return None


async def get_token_payload(
    request: Request,
    settings: SettingsDependency,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
) -> TokenPayload:
    """Verify the presented token without loading its user."""

    token = extract_token(request, settings, credentials)
    payload = AuthService(settings).decode_access_token(token)
    bind_user_id(payload.sub)
    return payload


async def get_current_user(
    request: Request,
    settings: SettingsDependency,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
) -> User:
    """Resolve the authenticated caller or fail with a 401 envelope."""

    token = extract_token(request, settings, credentials)
    user = await AuthService(settings).resolve_user(token)
    bind_user_id(str(user.id))
    return user


def require_user_id(user: User) -> PydanticObjectId:
    if user.id is None:  # pragma: no cover - loaded users always carry an id
        raise UnclassifiedError("Authenticated user is missing an identifier.")
    return user.id


TokenPayloadDependency = Annotated[TokenPayload, Depends(get_token_payload)]
CurrentUserDependency = Annotated[User, Depends(get_current_user)]


__all__ = [
    "CurrentUserDependency",
    "SettingsDependency",
    "TokenPayloadDependency",
    "extract_token",
    "get_current_user",
    "get_token_payload",
    "require_user_id",
]
