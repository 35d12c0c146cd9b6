"""Application error taxonomy and the HTTP translation layer."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Mapping

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.config import get_settings
from .core.context import REQUEST_ID_HEADER
from .schemas.system import ErrorResponse

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """Base class for domain-specific errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "application_error",
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Any | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        self.headers = dict(headers) if headers else None


class ValidationError(ApplicationError):
    """Malformed or out-of-range input."""

    def __init__(
        self,
        message: str = "Validation failed.",
        *,
        field: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        if errors is None and field is not None:
            errors = [{"field": field, "message": message, "type": "value_error"}]
        super().__init__(
            message,
            code="validation_error",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"errors": errors} if errors else None,
        )


class AuthenticationError(ApplicationError):
    """Missing, malformed or expired credentials."""

    def __init__(self, message: str = "Authentication required.") -> None:
        super().__init__(
            message,
            code="authentication_error",
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(ApplicationError):
    """Record absent, or owned by somebody else."""

    def __init__(self, message: str = "Resource not found.") -> None:
        super().__init__(message, code="not_found", status_code=status.HTTP_404_NOT_FOUND)


class ConflictError(ApplicationError):
    """A unique field already holds the supplied value."""

    def __init__(self, message: str = "Resource already exists.", *, field: str | None = None) -> None:
        super().__init__(
            message,
            code="conflict",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": field} if field else None,
        )


class UnclassifiedError(ApplicationError):
    """Unexpected failure."""

    def __init__(self, message: str = "Internal server error.", *, details: Any | None = None) -> None:
        super().__init__(
            message,
            code="server_error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )


_HTTP_STATUS_CODE_MAP: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_401_UNAUTHORIZED: "authentication_error",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


def _with_request_id(request: Request, details: Any | None) -> Any | None:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        return details
    if details is None:
        return {"request_id": request_id}
    if isinstance(details, dict):
        return {**details, "request_id": request_id}
    return {"detail": details, "request_id": request_id}


def _error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    payload = ErrorResponse(code=code, message=message, details=_with_request_id(request, details))
    response = JSONResponse(status_code=status_code, content=payload.model_dump())
    if headers:
        response.headers.update(headers)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


def _field_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    problems: list[dict[str, Any]] = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        problems.append(
            {
                "field": ".".join(location) or None,
                "message": error.get("msg", "Invalid value."),
                "type": error.get("type", "value_error"),
            }
        )
    return problems


def _duplicate_field(exc: DuplicateKeyError) -> str | None:
    details = exc.details or {}
    key_pattern = details.get("keyPattern") or details.get("keyValue")
    if isinstance(key_pattern, Mapping) and key_pattern:
        return str(next(iter(key_pattern)))
    return None


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy onto HTTP responses for ``app``."""

    @app.exception_handler(ApplicationError)
    async def _handle_application_error(request: Request, exc: ApplicationError) -> JSONResponse:
        log = logger.error if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
        log(
            "Application error encountered",
            extra={"code": exc.code, "status_code": exc.status_code, "path": request.url.path},
        )
        return _error_response(
            request,
            status_code=exc.status_code,
            code=exc.code,
            message=exc.message,
            details=exc.details,
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = _field_errors(exc)
        logger.warning("Request validation failed", extra={"errors": errors})
        return _error_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            code="validation_error",
            message="Validation failed.",
            details={"errors": errors},
        )

    @app.exception_handler(DuplicateKeyError)
    async def _handle_duplicate_key(request: Request, exc: DuplicateKeyError) -> JSONResponse:
        field = _duplicate_field(exc)
        logger.warning("Duplicate key rejected by the record store", extra={"field": field})
        message = f"{field} already exists." if field else "Resource already exists."
        return _error_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            code="conflict",
            message=message,
            details={"field": field} if field else None,
        )

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = _HTTP_STATUS_CODE_MAP.get(exc.status_code, "http_error")
        if isinstance(exc.detail, str):
            message = exc.detail
        else:
            try:
                message = HTTPStatus(exc.status_code).phrase
            except ValueError:
                message = "Error"
        logger.warning(
            "HTTP exception raised",
            extra={"code": code, "status_code": exc.status_code, "path": request.url.path},
        )
        return _error_response(
            request,
            status_code=exc.status_code,
            code=code,
            message=message,
            headers=exc.headers or None,
        )

    @app.exception_handler(Exception)
    async def _handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled application error.")
        details = None
        if get_settings().expose_error_details:
            details = {"debug": {"type": type(exc).__name__, "error": str(exc)}}
        return _error_response(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code="server_error",
            message="Internal server error.",
            details=details,
        )


__all__ = [
    "ApplicationError",
    "AuthenticationError",
    "ConflictError",
    "NotFoundError",
    "UnclassifiedError",
    "ValidationError",
    "register_exception_handlers",
]
