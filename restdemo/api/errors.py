"""
Error handlers - global exception handlers mapping failures to ApiError JSON.

Invariants:
    - RequestRejected carries a failure variant produced by a guard or validator
    - EntityNotFound -> NOT_FOUND
    - RequestValidationError -> MISSING_HEADER when a bound header is absent,
      otherwise VALIDATION_FAILED for parameters or body
    - Exception (catch-all) -> INTERNAL_ERROR, never leaks internal details
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from restdemo.domain.errors import to_api_error
from restdemo.domain.exceptions import EntityNotFound
from restdemo.domain.failures import (
    BodyValidationFailed,
    Failure,
    InternalError,
    MissingHeader,
    NotFound,
    ParameterValidationFailed,
    ValidationError,
)
from restdemo.domain.validation import format_error

logger = logging.getLogger(__name__)


class RequestRejected(Exception):
    """Raised at the HTTP boundary to short-circuit a request with a failure."""

    def __init__(self, failure: Failure) -> None:
        self.failure = failure
        super().__init__(str(failure))


def error_response(failure: Failure, request: Request) -> JSONResponse:
    """Render a failure as the canonical error JSON."""
    api_error = to_api_error(failure, request.url.path)
    return JSONResponse(status_code=api_error.status, content=api_error.to_dict())


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log an unhandled exception and render INTERNAL_ERROR without its details."""
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    return error_response(InternalError(), request)


def _detailed(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return settings is None or settings.validation_error_detail == "detailed"


def _body_target(request: Request) -> str:
    """Type name of the body model declared on the matched route."""
    dependant = getattr(request.scope.get("route"), "dependant", None)
    for param in getattr(dependant, "body_params", ()):
        name = getattr(param.field_info.annotation, "__name__", None)
        if name:
            return name
    return "request body"


def _parameter_message(error: dict[str, Any]) -> str:
    name = error["loc"][-1]
    if error.get("type") == "missing":
        return f"Parameter '{name}' is required"
    return f"Parameter '{name}': {error['msg']} (rejected value: {error.get('input')})"


def _body_error(error: dict[str, Any]) -> ValidationError:
    if error.get("type") == "json_invalid":
        return ValidationError(message=error["msg"])
    field = ".".join(str(part) for part in error["loc"][1:]) or None
    if field is None and error.get("type") == "missing":
        return ValidationError(message="Request body is required")
    return ValidationError(message=error["msg"], field=field, rejected_value=error.get("input"))


def failure_from_validation_error(exc: RequestValidationError, request: Request) -> Failure:
    """
    Convert framework binding errors into a failure variant.

    A missing bound header takes precedence over every other error; only
    the first one is reported. Query and path errors come next, then body
    errors, which are rendered like domain constraint violations.
    """
    errors = exc.errors()

    for error in errors:
        loc = error.get("loc", ())
        if loc and loc[0] == "header" and error.get("type") == "missing":
            return MissingHeader(str(loc[-1]))

    parameter_errors = [e for e in errors if e.get("loc", ("",))[0] in ("query", "path")]
    if parameter_errors:
        return ParameterValidationFailed(tuple(_parameter_message(e) for e in parameter_errors))

    detailed = _detailed(request)
    return BodyValidationFailed(
        target=_body_target(request),
        errors=tuple(format_error(_body_error(e), detailed) for e in errors),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(RequestRejected)
    async def request_rejected_handler(request: Request, exc: RequestRejected) -> JSONResponse:
        logger.warning("Request rejected on %s: %s", request.url.path, exc.failure)
        return error_response(exc.failure, request)

    @app.exception_handler(EntityNotFound)
    async def not_found_handler(request: Request, exc: EntityNotFound) -> JSONResponse:
        logger.warning("Not found on %s: %s", request.url.path, exc.message)
        return error_response(NotFound(exc.message), request)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return error_response(failure_from_validation_error(exc, request), request)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all - never leaks internal details."""
        return internal_error_response(request, exc)
