"""Repository adapters - In-memory and database implementations."""

from .memory import InMemoryResourceRepository, InMemoryTodoRepository
from .postgres import PostgresResourceRepository, PostgresTodoRepository, run_migrations

__all__ = [
    "InMemoryResourceRepository",
    "InMemoryTodoRepository",
    "PostgresResourceRepository",
    "PostgresTodoRepository",
    "run_migrations",
]
