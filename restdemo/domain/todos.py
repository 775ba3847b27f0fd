"""
To-do domain service.

Orchestrates lookups, creation and paginated listing of to-do items over
the TodoRepository port.
"""

import logging
from dataclasses import dataclass
from datetime import date

from .exceptions import TodoNotFound
from .pagination import Page, PageRequest, paginate
from .ports import Todo, TodoRepository

logger = logging.getLogger(__name__)

# Returned by list_all() while the store is empty; never persisted
DEFAULT_TODO = Todo(id=1, title="Default To-Do", description="This is a default To-Do item.")


@dataclass
class TodoService:
    """Domain service for to-do items."""

    repository: TodoRepository

    def list_all(self) -> list[Todo]:
        """
        Return every to-do, including archived ones.

        An empty store yields a single placeholder item so clients
        always receive a non-empty list.
        """
        if self.repository.count() == 0:
            logger.warning("No To-Do items found, returning a default item")
            return [DEFAULT_TODO]
        return self.repository.find_all()

    def get(self, todo_id: str) -> Todo:
        """
        Fetch a to-do by its id as received on the path.

        Raises:
            TodoNotFound: If the id is not numeric or no such to-do exists
        """
        try:
            parsed_id = int(todo_id)
        except ValueError:
            logger.error("Invalid ID format: %s", todo_id)
            raise TodoNotFound(todo_id) from None
        if not -(2**63) <= parsed_id < 2**63:
            raise TodoNotFound(todo_id)

        todo = self.repository.find_by_id(parsed_id)
        if todo is None:
            raise TodoNotFound(todo_id)
        return todo

    def create(
        self,
        title: str,
        description: str | None = None,
        due_date: date | None = None,
        tags: list[str] | None = None,
    ) -> Todo:
        """Create and persist a new to-do."""
        logger.info("Creating new To-Do item with title: %s", title)
        saved = self.repository.save(
            Todo(title=title, description=description, due_date=due_date, tags=list(tags or []))
        )
        logger.info("To-Do item created with ID: %s", saved.id)
        return saved

    def find_page(self, request: PageRequest, include_archived: bool = True) -> Page[Todo]:
        """
        Fetch one page of to-dos.

        Args:
            request: Resolved page descriptor
            include_archived: False restricts the listing to non-archived items

        Returns:
            Page whose totals describe every matching to-do
        """
        archived = None if include_archived else False
        items, total = self.repository.find_page(
            request.offset, request.size, request.sort, archived=archived
        )
        page = paginate(total, request.page, request.size, items, request.sort)
        logger.debug(
            "Fetched %d to-dos on page %d of %d", page.number_of_elements, page.number, page.total_pages
        )
        return page
