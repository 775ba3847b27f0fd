"""
Port interfaces - Entities and Protocol definitions for storage abstraction.

This module defines the entities the domain works with and the
interfaces (ports) it requires from a data store. Adapters implement
these protocols.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol

from .pagination import Sort


@dataclass
class Todo:
    """
    A to-do item.

    The id is assigned by the store on first save; ids are ascending
    integers, so ordering by id follows insertion order.
    """

    title: str
    description: str | None = None
    due_date: date | None = None
    tags: list[str] = field(default_factory=list)
    completed: bool = False
    completed_at: datetime | None = None
    archived: bool = False
    assigned_user_id: int | None = None
    created_at: datetime | None = None
    id: int | None = None


@dataclass
class Resource:
    """A named resource with a client-assigned id."""

    id: str
    name: str


# External (JSON) field name -> Todo attribute, for client-selectable sorts
TODO_SORT_FIELDS: dict[str, str] = {
    "id": "id",
    "title": "title",
    "description": "description",
    "dueDate": "due_date",
    "createdAt": "created_at",
    "completed": "completed",
}


class TodoRepository(Protocol):
    """Port interface for to-do persistence."""

    def find_all(self) -> list[Todo]:
        """Return every to-do, including archived ones, ordered by id."""
        ...

    def find_by_id(self, todo_id: int) -> Todo | None:
        ...

    def save(self, todo: Todo) -> Todo:
        """
        Insert or update a to-do.

        Assigns id and created_at on insert and returns the stored entity.
        """
        ...

    def delete_by_id(self, todo_id: int) -> None:
        """Delete a to-do. Deleting an unknown id is a no-op."""
        ...

    def count(self) -> int:
        ...

    def find_page(
        self, offset: int, limit: int, sort: Sort, *, archived: bool | None = None
    ) -> tuple[list[Todo], int]:
        """
        Fetch one slice of the to-dos matching the archived filter.

        Ordering is total: ties on the sort are broken by id.

        Args:
            offset: Number of matching items to skip
            limit: Maximum number of items to return
            sort: Orders on TODO_SORT_FIELDS keys
            archived: Filter on the archived flag; None matches all

        Returns:
            Tuple of (items, total count of matching items)
        """
        ...


class ResourceRepository(Protocol):
    """Port interface for resource persistence."""

    def find_all(self) -> list[Resource]:
        ...

    def find_by_id(self, resource_id: str) -> Resource | None:
        ...

    def save(self, resource: Resource) -> Resource:
        """Insert or replace the resource with the same id."""
        ...

    def delete_by_id(self, resource_id: str) -> None:
        ...

    def count(self) -> int:
        ...
