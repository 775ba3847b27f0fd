"""
To-do routes.

Defines the /api/todos endpoints. Two header styles coexist:
/all and /create use the aggregate guard, every other endpoint binds the
headers as FastAPI parameters.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import PlainTextResponse

from restdemo.api.context import RequestContext, get_request_context
from restdemo.api.dependencies import (
    ClientHeaders,
    client_headers,
    ensure_page_request,
    ensure_sort,
    ensure_valid,
    get_settings,
    get_todo_service,
    require_client_headers,
)
from restdemo.api.models import (
    ErrorResponse,
    PageResponse,
    TodoFullResponse,
    TodoListResponse,
    TodoRequest,
    TodoResponse,
)
from restdemo.config.settings import Settings
from restdemo.domain.pagination import Page, parse_sort, resolve_page_request, strict_page_request
from restdemo.domain.ports import TODO_SORT_FIELDS
from restdemo.domain.todos import TodoService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todos", tags=["todos"])

PROCESSED_BY = "TodoRouter"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing header or invalid input"},
    500: {"model": ErrorResponse, "description": "Unexpected error"},
}


def _set_pagination_headers(response: Response, page: Page) -> None:
    response.headers["X-Total-Count"] = str(page.total_elements)
    response.headers["X-Total-Pages"] = str(page.total_pages)
    response.headers["X-Current-Page"] = str(page.number)
    response.headers["X-Page-Size"] = str(page.size)


def _create(
    body: TodoRequest,
    request: Request,
    response: Response,
    context: RequestContext,
    settings: Settings,
    service: TodoService,
) -> TodoResponse:
    ensure_valid(body, context, settings)
    todo = service.create(body.title, body.description, body.due_date, body.tags)
    response.headers["Location"] = str(request.url_for("get_todo_by_id", todo_id=str(todo.id)))
    response.headers["X-Processed-By"] = PROCESSED_BY
    return TodoResponse.from_entity(todo)


@router.get(
    "/health",
    response_class=PlainTextResponse,
    summary="Liveness probe for the to-do API",
)
def todo_health() -> str:
    return "Todo API is up and running!"


@router.get(
    "/all",
    response_model=TodoListResponse,
    responses=ERROR_RESPONSES,
    summary="List every to-do item",
    description="Requires X-Client-Id and X-Request-Id. All missing headers are reported together.",
)
def get_all_todos(
    response: Response,
    headers: ClientHeaders = Depends(require_client_headers),
    service: TodoService = Depends(get_todo_service),
) -> TodoListResponse:
    """
    List all to-dos, archived ones included.

    When the store is empty a single default item is returned.
    """
    logger.info("Listing all todos for client %s", headers.client_id)
    todos = service.list_all()
    response.headers["X-Processed-By"] = PROCESSED_BY
    return TodoListResponse(count=len(todos), items=[TodoFullResponse.from_entity(t) for t in todos])


@router.post(
    "/create",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a to-do item (aggregate header check)",
)
def create_todo_checked(
    body: TodoRequest,
    request: Request,
    response: Response,
    headers: ClientHeaders = Depends(require_client_headers),
    context: RequestContext = Depends(get_request_context),
    settings: Settings = Depends(get_settings),
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    logger.info("Creating todo for client %s", headers.client_id)
    return _create(body, request, response, context, settings, service)


@router.get(
    "",
    response_model=PageResponse[TodoResponse],
    responses=ERROR_RESPONSES,
    summary="List non-archived to-do items, one page at a time",
)
def list_todos(
    response: Response,
    page: int = Query(0, description="Zero-based page index (>= 0)"),
    size: int = Query(10, description="Page size (>= 1)"),
    headers: ClientHeaders = Depends(client_headers),
    service: TodoService = Depends(get_todo_service),
) -> PageResponse[TodoResponse]:
    """
    Strict pagination over non-archived to-dos, ordered by id.

    Out-of-range page or size fails with VALIDATION_FAILED.
    """
    logger.info("Listing todos page=%s size=%s for client %s", page, size, headers.client_id)
    page_request = ensure_page_request(strict_page_request(page, size))
    result = service.find_page(page_request, include_archived=False)
    response.headers["X-Processed-By"] = PROCESSED_BY
    return PageResponse[TodoResponse].from_page(result.map(TodoResponse.from_entity))


@router.post(
    "",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a to-do item",
)
def create_todo(
    body: TodoRequest,
    request: Request,
    response: Response,
    headers: ClientHeaders = Depends(client_headers),
    context: RequestContext = Depends(get_request_context),
    settings: Settings = Depends(get_settings),
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    logger.info("Creating todo for client %s", headers.client_id)
    return _create(body, request, response, context, settings, service)


@router.get(
    "/paginated",
    response_model=PageResponse[TodoResponse],
    responses=ERROR_RESPONSES,
    summary="List to-do items with lenient paging and sorting",
)
def list_todos_paginated(
    response: Response,
    page: str | None = Query(None, description="Zero-based page index; invalid values fall back to 0"),
    size: str | None = Query(None, description="Page size; invalid values fall back to the default"),
    sort: list[str] | None = Query(None, description="property[,property...][,asc|desc]"),
    headers: ClientHeaders = Depends(client_headers),
    settings: Settings = Depends(get_settings),
    service: TodoService = Depends(get_todo_service),
) -> PageResponse[TodoResponse]:
    """
    Lenient pagination: out-of-range values are replaced, never rejected.

    Only an unknown sort property fails the request.
    """
    logger.info("Listing paginated todos for client %s", headers.client_id)
    requested_sort = ensure_sort(parse_sort(sort or [], TODO_SORT_FIELDS))
    page_request = resolve_page_request(
        page,
        size,
        requested_sort,
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )
    logger.debug("Resolved page request: %s", page_request)
    result = service.find_page(page_request)
    response.headers["X-Processed-By"] = PROCESSED_BY
    _set_pagination_headers(response, result)
    return PageResponse[TodoResponse].from_page(result.map(TodoResponse.from_entity))


@router.get(
    "/paginatedV2",
    response_model=PageResponse[TodoResponse],
    responses=ERROR_RESPONSES,
    summary="List to-do items with mandatory, strictly checked paging",
)
def list_todos_paginated_v2(
    response: Response,
    page: int = Query(..., description="Zero-based page index (>= 0)"),
    size: int = Query(..., description="Page size (>= 1)"),
    headers: ClientHeaders = Depends(client_headers),
    service: TodoService = Depends(get_todo_service),
) -> PageResponse[TodoResponse]:
    logger.info("Listing todos (v2) page=%s size=%s for client %s", page, size, headers.client_id)
    page_request = ensure_page_request(strict_page_request(page, size))
    result = service.find_page(page_request)
    response.headers["X-Processed-By"] = PROCESSED_BY
    _set_pagination_headers(response, result)
    return PageResponse[TodoResponse].from_page(result.map(TodoResponse.from_entity))


@router.get(
    "/{todo_id}",
    response_model=TodoResponse,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse, "description": "To-do not found"}},
    summary="Fetch one to-do item",
)
def get_todo_by_id(
    todo_id: str,
    response: Response,
    headers: ClientHeaders = Depends(client_headers),
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Non-numeric ids are reported as not found, like unknown ones."""
    logger.info("Fetching todo %s for client %s", todo_id, headers.client_id)
    todo = service.get(todo_id)
    response.headers["X-Processed-By"] = PROCESSED_BY
    return TodoResponse.from_entity(todo)
