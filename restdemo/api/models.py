"""
API request and response models.

Pydantic models for FastAPI endpoint parsing and OpenAPI schema generation.
JSON field names are camelCase; Python attributes stay snake_case.

Request models only enforce types. Field rules (required, future-or-present)
are declared as constraint descriptors on each model and checked by the
domain validator, so every violation is reported in one response.
"""

from datetime import date, datetime
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from restdemo.domain.pagination import Page, Sort
from restdemo.domain.ports import Resource, Todo
from restdemo.domain.validation import Constraint, FutureOrPresent, Required

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TodoRequest(CamelModel):
    """Request model for creating a to-do item."""

    title: str | None = Field(None, description="Title of the to-do (mandatory)")
    description: str | None = None
    due_date: date | None = Field(None, description="Due date; must not be in the past")
    tags: list[str] | None = None

    constraints: ClassVar[tuple[Constraint, ...]] = (
        Required("title", "Title is mandatory"),
        FutureOrPresent("dueDate", "Due date must not be in the past"),
    )


class TodoResponse(CamelModel):
    """Response model for a to-do item."""

    id: int
    title: str
    description: str | None = None
    due_date: date | None = None
    tags: list[str] | None = None

    @classmethod
    def from_entity(cls, todo: Todo) -> "TodoResponse":
        return cls(
            id=todo.id,
            title=todo.title,
            description=todo.description,
            due_date=todo.due_date,
            tags=todo.tags or None,
        )


class TodoFullResponse(TodoResponse):
    """Response model for a to-do item including its status flags."""

    completed: bool = False
    archived: bool = False

    @classmethod
    def from_entity(cls, todo: Todo) -> "TodoFullResponse":
        return cls(
            id=todo.id,
            title=todo.title,
            description=todo.description,
            due_date=todo.due_date,
            tags=todo.tags or None,
            completed=todo.completed,
            archived=todo.archived,
        )


class TodoListResponse(CamelModel):
    """Response model for the unpaginated to-do listing."""

    count: int
    items: list[TodoFullResponse]


class ResourceRequest(CamelModel):
    """Request model for creating a resource."""

    id: str | None = None
    name: str | None = None

    constraints: ClassVar[tuple[Constraint, ...]] = (
        Required("id", "id is required"),
        Required("name", "name is required"),
    )


class ResourceUpdateRequest(CamelModel):
    """Request model for renaming a resource."""

    name: str | None = None

    constraints: ClassVar[tuple[Constraint, ...]] = (Required("name", "name is required"),)


class ResourceResponse(CamelModel):
    """Response model for a resource."""

    id: str
    name: str

    @classmethod
    def from_entity(cls, resource: Resource) -> "ResourceResponse":
        return cls(id=resource.id, name=resource.name)


class SortInfo(CamelModel):
    empty: bool
    sorted: bool
    unsorted: bool

    @classmethod
    def from_sort(cls, sort: Sort) -> "SortInfo":
        return cls(empty=not sort.is_sorted, sorted=sort.is_sorted, unsorted=not sort.is_sorted)


class PageableInfo(CamelModel):
    """Describes the page that was requested."""

    page_number: int
    page_size: int
    offset: int
    sort: SortInfo
    paged: bool = True
    unpaged: bool = False


class PageResponse(CamelModel, Generic[T]):
    """
    Paginated response envelope.

    Field names and semantics follow the Spring Data page JSON shape.
    """

    content: list[T]
    pageable: PageableInfo
    total_elements: int
    total_pages: int
    first: bool
    last: bool
    size: int
    number: int
    number_of_elements: int
    empty: bool
    sort: SortInfo

    @classmethod
    def from_page(cls, page: Page[T]) -> "PageResponse[T]":
        sort = SortInfo.from_sort(page.sort)
        return cls(
            content=list(page.content),
            pageable=PageableInfo(
                page_number=page.number,
                page_size=page.size,
                offset=page.offset,
                sort=sort,
            ),
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            first=page.first,
            last=page.last,
            size=page.size,
            number=page.number,
            number_of_elements=page.number_of_elements,
            empty=page.empty,
            sort=sort,
        )


class ErrorResponse(BaseModel):
    """Standard error response model."""

    code: str = Field(..., examples=["VALIDATION_FAILED"])
    message: str
    status: int
    timestamp: datetime
    errors: list[str] = Field(default_factory=list)
    path: str | None = None


class HealthResponse(BaseModel):
    status: str
