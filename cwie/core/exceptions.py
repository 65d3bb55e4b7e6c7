"""Domain error taxonomy shared by services and the HTTP layer."""

from typing import NoReturn

import structlog
from fastapi import status

logger = structlog.get_logger(__name__)

GENERIC_INTERNAL_MESSAGE = "An internal error occurred"


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = GENERIC_INTERNAL_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(ServiceError):
    """Bad credentials, failed identity verification, invalid token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class ForbiddenError(ServiceError):
    """Known identity but the operation is not allowed."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(ServiceError):
    """Uniqueness violation or a delete blocked by dependent rows."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource conflict"


class UnprocessableError(ServiceError):
    """Request is well-formed but inconsistent with stored data."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    default_message = "Invalid request"


class InternalError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# Errors whose message is safe to pass through to the client
PASSTHROUGH_ERRORS = (
    UnauthenticatedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    UnprocessableError,
)


def normalize_error(exc: Exception, operation: str, **context) -> NoReturn:
    """Re-raise known service errors, log and wrap everything else as InternalError."""
    if isinstance(exc, PASSTHROUGH_ERRORS):
        raise exc

    logger.error(
        "service_operation_failed",
        operation=operation,
        error=str(exc),
        error_type=type(exc).__name__,
        **{k: str(v) for k, v in context.items()},
        exc_info=exc,
    )
    raise InternalError(operation) from exc
