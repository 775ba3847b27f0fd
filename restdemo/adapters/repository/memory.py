"""
In-memory repository adapters - Implement the storage protocols with dicts.

This is the default store when no DATABASE_URL is configured. Contents
are lost on restart. Entities are copied on the way in and out so callers
never share state with the store.
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone

from restdemo.domain.pagination import Sort, sort_items
from restdemo.domain.ports import TODO_SORT_FIELDS, Resource, Todo


class InMemoryTodoRepository:
    """
    Implements TodoRepository protocol over a dict keyed by id.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Sync route handlers run in a threadpool, so access is serialized
    with a lock.
    """

    def __init__(self) -> None:
        self._items: dict[int, Todo] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def find_all(self) -> list[Todo]:
        with self._lock:
            return [replace(t) for _, t in sorted(self._items.items())]

    def find_by_id(self, todo_id: int) -> Todo | None:
        with self._lock:
            todo = self._items.get(todo_id)
            return replace(todo) if todo is not None else None

    def save(self, todo: Todo) -> Todo:
        with self._lock:
            stored = replace(todo, tags=list(todo.tags))
            if stored.id is None:
                stored.id = self._next_id
                self._next_id += 1
            else:
                self._next_id = max(self._next_id, stored.id + 1)
            if stored.created_at is None:
                stored.created_at = datetime.now(timezone.utc)
            self._items[stored.id] = stored
            return replace(stored)

    def delete_by_id(self, todo_id: int) -> None:
        with self._lock:
            self._items.pop(todo_id, None)

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def find_page(
        self, offset: int, limit: int, sort: Sort, *, archived: bool | None = None
    ) -> tuple[list[Todo], int]:
        with self._lock:
            matching = [t for t in self._items.values() if archived is None or t.archived == archived]
        ordered = sort_items(matching, sort, TODO_SORT_FIELDS)
        return [replace(t) for t in ordered[offset : offset + limit]], len(matching)


class InMemoryResourceRepository:
    """Implements ResourceRepository protocol over a dict keyed by id."""

    def __init__(self) -> None:
        self._items: dict[str, Resource] = {}
        self._lock = threading.Lock()

    def find_all(self) -> list[Resource]:
        with self._lock:
            return [replace(r) for r in self._items.values()]

    def find_by_id(self, resource_id: str) -> Resource | None:
        with self._lock:
            resource = self._items.get(resource_id)
            return replace(resource) if resource is not None else None

    def save(self, resource: Resource) -> Resource:
        with self._lock:
            self._items[resource.id] = replace(resource)
            return replace(resource)

    def delete_by_id(self, resource_id: str) -> None:
        with self._lock:
            self._items.pop(resource_id, None)

    def count(self) -> int:
        with self._lock:
            return len(self._items)
