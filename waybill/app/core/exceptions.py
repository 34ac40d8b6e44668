"""
Custom exceptions and error handlers for consistent error responses.

Domain errors raised by the lifecycle engine, the resource services and the
repositories all derive from AppException, so a single handler maps them to
HTTP responses. The status code travels with the error class; the core never
picks one itself.
"""

import logging
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from typing import Any, Dict, Optional

logger = logging.getLogger("waybill.errors")


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ValidationError(AppException):
    """Raised when input reaching the core is malformed (e.g. an empty note)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="ERR_VALIDATION_001",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"field": field} if field else {}
        )


class ResourceNotFoundError(AppException):
    """
    Raised when no entity matches id + owner.

    An entity that exists but belongs to another owner raises exactly this
    error too, with the same message.
    """

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with ID {resource_id} not found"
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


NotFound = ResourceNotFoundError


class StateTransitionError(AppException):
    """Raised when a requested status change is not in the transition table."""

    def __init__(self, current_state: Any, attempted_state: Any, entity: str = "entity"):
        self.current_state = current_state
        self.attempted_state = attempted_state
        current = getattr(current_state, "value", current_state)
        attempted = getattr(attempted_state, "value", attempted_state)
        super().__init__(
            message=f"Cannot move {entity} from {current} to {attempted}",
            error_code="ERR_STATE_001",
            status_code=status.HTTP_409_CONFLICT,
            details={"current_state": current, "attempted_state": attempted}
        )


class ConflictError(AppException):
    """Raised when a write is based on a stale version of the entity."""

    def __init__(self, resource: str, resource_id: Any, expected_version: Optional[int] = None):
        super().__init__(
            message=f"{resource} with ID {resource_id} was modified concurrently",
            error_code="ERR_CONFLICT_001",
            status_code=status.HTTP_409_CONFLICT,
            details={"resource": resource, "id": resource_id, "expected_version": expected_version}
        )


class RepositoryError(AppException):
    """Raised for any failure below the repository contract."""

    def __init__(self, message: str = "Storage operation failed", cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(
            message=message,
            error_code="ERR_REPOSITORY_001",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"cause": type(cause).__name__} if cause else {}
        )


class AuthenticationError(AppException):
    """Raised for authentication failures."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_001",
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class RateLimitExceededError(AppException):
    """Raised when a client exhausts its requests for the window."""

    def __init__(self, retry_after: int):
        super().__init__(
            message="Too many requests",
            error_code="ERR_RATE_LIMIT_001",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            details={"retry_after": retry_after}
        )


def error_body(exc: AppException) -> Dict[str, Any]:
    return {
        "error_code": exc.error_code,
        "message": exc.message,
        "details": exc.details
    }


def _error_response(request: Request, status_code: int, body: Dict[str, Any], headers=None) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        body = {**body, "correlation_id": correlation_id}
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)


def app_error_response(request: Request, exc: AppException, headers=None) -> JSONResponse:
    """Error response for an AppException raised or built outside a route."""
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer", **(headers or {})}
    return _error_response(request, exc.status_code, error_body(exc), headers=headers)


# Framework-raised HTTP errors that carry no AppException
HTTP_ERROR_CODES = {
    400: "ERR_BAD_REQUEST",
    401: "ERR_UNAUTHORIZED",
    403: "ERR_FORBIDDEN",
    404: "ERR_NOT_FOUND",
    405: "ERR_METHOD_NOT_ALLOWED",
    409: "ERR_CONFLICT",
}


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Domain errors: the status code comes from the error class."""
    if exc.status_code >= 500:
        logger.error("Application error", extra={"error_code": exc.error_code, "path": request.url.path})
    else:
        logger.info("%s: %s", exc.error_code, exc.message, extra={"path": request.url.path})

    return app_error_response(request, exc)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    body = {
        "error_code": HTTP_ERROR_CODES.get(exc.status_code, "ERR_UNKNOWN"),
        "message": exc.detail,
        "details": {}
    }
    return _error_response(request, exc.status_code, body, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and query parameters."""
    body = {
        "error_code": "ERR_VALIDATION",
        "message": "Validation error",
        "details": {"errors": exc.errors()}
    }
    return _error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, body)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", type(exc).__name__)
    body = {
        "error_code": "ERR_INTERNAL_SERVER",
        "message": "An internal server error occurred",
        "details": {}
    }
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, body)
