"""Routes handling user authentication flows."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from ...core.config import Settings
from ...core.security import GeneratedToken
from ...deps import SettingsDependency, TokenPayloadDependency
from ...errors import NotFoundError
from ...models import User
from ...schemas import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserPublic,
)
from ...services import AuthService, UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_auth_cookie(response: Response, token: GeneratedToken, settings: Settings) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token.token,
        max_age=token.max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


def _auth_response(message: str, user: User, token: GeneratedToken) -> AuthResponse:
    return AuthResponse(message=message, token=token.token, user=UserPublic.from_document(user))


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def signup(
    payload: SignupRequest,
    response: Response,
    settings: SettingsDependency,
) -> AuthResponse:
    service = AuthService(settings)
    user = await service.register_user(name=payload.name, email=payload.email, password=payload.password)
    token = service.issue_token(user)
    _set_auth_cookie(response, token, settings)
    return _auth_response("User registered successfully.", user, token)


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Authenticate using email and password",
)
async def login(
    payload: LoginRequest,
    response: Response,
    settings: SettingsDependency,
) -> AuthResponse:
    service = AuthService(settings)
    user = await service.authenticate_user(payload.email, payload.password)
    token = service.issue_token(user)
    _set_auth_cookie(response, token, settings)
    return _auth_response("Logged in successfully.", user, token)


@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Clear the session cookie",
)
async def logout(response: Response, settings: SettingsDependency) -> MessageResponse:
    response.delete_cookie(
        key=settings.auth_cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return MessageResponse(message="Logged out successfully.")


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Return the authenticated user",
)
async def read_current_user(token: TokenPayloadDependency) -> CurrentUserResponse:
    user = await UserService().get_user(token.sub)
    if user is None:
        raise NotFoundError("User not found.")
    return CurrentUserResponse(user=UserPublic.from_document(user))
