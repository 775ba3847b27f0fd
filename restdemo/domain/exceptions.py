"""
Domain exceptions - Semantic error types for to-dos and resources.

This module defines domain-specific exceptions that communicate
lookup failures without leaking infrastructure details.
"""


class DomainError(Exception):
    """Base class for domain errors."""

    pass


class EntityNotFound(DomainError):
    """Referenced entity does not exist."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TodoNotFound(EntityNotFound):
    """No to-do item with the given id (or the id is not numeric)."""

    def __init__(self, todo_id: object) -> None:
        self.todo_id = todo_id
        super().__init__(f"To-Do item not found with ID: {todo_id}")


class ResourceNotFound(EntityNotFound):
    """No resource with the given id."""

    def __init__(self, resource_id: str) -> None:
        self.resource_id = resource_id
        super().__init__(f"Resource not found with ID: {resource_id}")
