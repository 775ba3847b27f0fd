"""
Error mapping - failure variants to the canonical API error payload.

This module owns the error code vocabulary and the single place where a
failure becomes an ApiError. Business logic never builds ApiError itself.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from http import HTTPStatus

from .failures import (
    MISSING_HEADER_PREFIX,
    BodyValidationFailed,
    Failure,
    InternalError,
    MissingHeader,
    MissingHeaders,
    NotFound,
    ParameterValidationFailed,
)


class ErrorCode(str, Enum):
    """Stable error codes exposed to API clients."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    MISSING_HEADER = "MISSING_HEADER"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class ApiError:
    """Canonical error payload returned for every 4xx/5xx condition."""

    code: ErrorCode
    message: str
    status: int
    timestamp: datetime
    errors: tuple[str, ...] = field(default_factory=tuple)
    path: str | None = None

    def to_dict(self) -> dict:
        body = {
            "code": self.code.value,
            "message": self.message,
            "status": self.status,
            "timestamp": self.timestamp.isoformat(),
            "errors": list(self.errors),
        }
        if self.path is not None:
            body["path"] = self.path
        return body


def to_api_error(failure: Failure, path: str | None, now: datetime | None = None) -> ApiError:
    """
    Convert a failure into an ApiError.

    Args:
        failure: Tagged failure produced by a guard, validator or lookup
        path: Request path that produced the failure
        now: Mapping time; defaults to the current UTC instant

    Returns:
        Immutable ApiError stamped with the mapping time
    """
    timestamp = now or datetime.now(timezone.utc)

    if isinstance(failure, MissingHeaders):
        code, status = ErrorCode.INVALID_ARGUMENT, HTTPStatus.BAD_REQUEST
        message = failure.message
        errors = tuple(MISSING_HEADER_PREFIX + name for name in failure.names)
    elif isinstance(failure, MissingHeader):
        code, status = ErrorCode.MISSING_HEADER, HTTPStatus.BAD_REQUEST
        message = failure.message
        errors = (message,)
    elif isinstance(failure, BodyValidationFailed):
        code, status = ErrorCode.VALIDATION_FAILED, HTTPStatus.BAD_REQUEST
        message = f"Validation failed for: {failure.target}"
        errors = failure.errors
    elif isinstance(failure, ParameterValidationFailed):
        code, status = ErrorCode.VALIDATION_FAILED, HTTPStatus.BAD_REQUEST
        message = failure.message
        errors = failure.errors
    elif isinstance(failure, NotFound):
        code, status = ErrorCode.NOT_FOUND, HTTPStatus.NOT_FOUND
        message = failure.message
        errors = (message,)
    elif isinstance(failure, InternalError):
        code, status = ErrorCode.INTERNAL_ERROR, HTTPStatus.INTERNAL_SERVER_ERROR
        message = failure.message
        errors = (message,)
    else:
        raise TypeError(f"Unsupported failure type: {type(failure).__name__}")

    return ApiError(
        code=code,
        message=message,
        status=int(status),
        timestamp=timestamp,
        errors=tuple(errors),
        path=path,
    )
