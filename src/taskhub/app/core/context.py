"""Request-scoped context variables consumed by logging."""

from __future__ import annotations

from contextvars import ContextVar, Token

REQUEST_ID_HEADER = "X-Request-ID"

_request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
_user_id_var: ContextVar[str] = ContextVar("user_id", default="-")


def get_request_id() -> str:
    """Return the correlation identifier bound to the current context."""

    return _request_id_var.get()


def bind_request_id(request_id: str) -> Token[str]:
    return _request_id_var.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _request_id_var.reset(token)


def get_user_id() -> str:
    """Return the authenticated user id for the current request, or ``-``."""

    return _user_id_var.get()


def bind_user_id(user_id: str) -> Token[str]:
    """Remember which user the current request is acting for.

    The auth dependency binds this once the bearer token is verified so that
    every log line emitted afterwards carries the caller's id.
    """

    return _user_id_var.set(user_id)


def reset_user_id(token: Token[str]) -> None:
    _user_id_var.reset(token)


__all__ = [
    "REQUEST_ID_HEADER",
    "bind_request_id",
    "bind_user_id",
    "get_request_id",
    "get_user_id",
    "reset_request_id",
    "reset_user_id",
]
