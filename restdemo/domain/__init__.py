"""
Domain layer - Pure business logic with zero framework imports.

This package contains the to-do and resource services, the request
guards (headers, validation, pagination) and the failure-to-error
mapping. It defines its own port interfaces for storage, keeping the
HTTP and database adapters outside.
"""

from .errors import ApiError, ErrorCode, to_api_error
from .exceptions import DomainError, EntityNotFound, ResourceNotFound, TodoNotFound
from .ports import Resource, ResourceRepository, Todo, TodoRepository
from .resources import ResourceService
from .todos import TodoService

__all__ = [
    "ApiError",
    "DomainError",
    "EntityNotFound",
    "ErrorCode",
    "Resource",
    "ResourceNotFound",
    "ResourceRepository",
    "ResourceService",
    "Todo",
    "TodoNotFound",
    "TodoRepository",
    "TodoService",
    "to_api_error",
]
