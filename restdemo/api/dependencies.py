"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting domain services,
the storage adapters created at startup, and the header guards.

Two header guards exist for the to-do API:
- require_client_headers reads raw headers and reports every missing
  name in one INVALID_ARGUMENT response
- client_headers binds each header as a FastAPI parameter; an absent
  header is reported alone as MISSING_HEADER by the framework, and a
  present-but-blank one then fails the same presence check
"""

from dataclasses import dataclass

from fastapi import Depends, Header, Request

from restdemo.api.context import RequestContext
from restdemo.api.errors import RequestRejected
from restdemo.api.models import CamelModel
from restdemo.config.settings import Settings
from restdemo.domain.failures import ParameterValidationFailed
from restdemo.domain.headers import HeaderSet, check_required
from restdemo.domain.pagination import PageRequest, Sort
from restdemo.domain.ports import ResourceRepository, TodoRepository
from restdemo.domain.resources import ResourceService
from restdemo.domain.todos import TodoService
from restdemo.domain.validation import validate_body

CLIENT_ID_HEADER = "X-Client-Id"
CLIENT_REQUEST_ID_HEADER = "X-Request-Id"
AUTH_TOKEN_HEADER = "X-Auth-Token"

TODO_REQUIRED_HEADERS = (CLIENT_ID_HEADER, CLIENT_REQUEST_ID_HEADER)


@dataclass(frozen=True)
class ClientHeaders:
    """Caller identification headers required by the to-do API."""

    client_id: str
    request_id: str


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_todo_repository(request: Request) -> TodoRepository:
    """
    Get the to-do store from app state.

    The store is chosen during app creation/startup and stored in app.state.
    """
    return request.app.state.todo_repository


def get_resource_repository(request: Request) -> ResourceRepository:
    return request.app.state.resource_repository


def get_todo_service(repository: TodoRepository = Depends(get_todo_repository)) -> TodoService:
    return TodoService(repository=repository)


def get_resource_service(
    repository: ResourceRepository = Depends(get_resource_repository),
) -> ResourceService:
    return ResourceService(repository=repository)


def _ensure_present(headers: HeaderSet, required: tuple[str, ...]) -> None:
    failure = check_required(headers, required)
    if failure is not None:
        raise RequestRejected(failure)


def require_client_headers(request: Request) -> ClientHeaders:
    """
    Aggregate guard: every missing or blank required header is reported together.

    Raises:
        RequestRejected: With MissingHeaders naming each absent header
    """
    headers = HeaderSet(request.headers.items())
    _ensure_present(headers, TODO_REQUIRED_HEADERS)
    return ClientHeaders(
        client_id=headers[CLIENT_ID_HEADER],
        request_id=headers[CLIENT_REQUEST_ID_HEADER],
    )


def client_headers(
    client_id: str = Header(..., alias=CLIENT_ID_HEADER, description="Calling client identifier"),
    request_id: str = Header(..., alias=CLIENT_REQUEST_ID_HEADER, description="Client-supplied request id"),
) -> ClientHeaders:
    """Framework-bound guard for the same headers as require_client_headers."""
    headers = HeaderSet({CLIENT_ID_HEADER: client_id, CLIENT_REQUEST_ID_HEADER: request_id})
    _ensure_present(headers, TODO_REQUIRED_HEADERS)
    return ClientHeaders(client_id=client_id, request_id=request_id)


def auth_token(
    token: str = Header(..., alias=AUTH_TOKEN_HEADER, description="Caller auth token"),
) -> str:
    """Require the X-Auth-Token header. Its value is not verified."""
    _ensure_present(HeaderSet({AUTH_TOKEN_HEADER: token}), (AUTH_TOKEN_HEADER,))
    return token


def ensure_valid(body: CamelModel, context: RequestContext, settings: Settings) -> None:
    """
    Run the body model's declared constraints.

    Raises:
        RequestRejected: With BodyValidationFailed listing every violation
    """
    failure = validate_body(
        type(body).__name__,
        body.model_dump(by_alias=True),
        getattr(type(body), "constraints", ()),
        context.today,
        detailed=settings.validation_error_detail == "detailed",
    )
    if failure is not None:
        raise RequestRejected(failure)


def ensure_page_request(result: PageRequest | ParameterValidationFailed) -> PageRequest:
    """Unwrap a page request resolution, raising its failure."""
    if isinstance(result, ParameterValidationFailed):
        raise RequestRejected(result)
    return result


def ensure_sort(result: Sort | ParameterValidationFailed) -> Sort:
    if isinstance(result, ParameterValidationFailed):
        raise RequestRejected(result)
    return result
