"""
PostgreSQL repository adapters - Implement the storage protocols via psycopg3.

This module provides the PostgreSQL implementation of the domain's
repository ports using psycopg3 with raw SQL over a shared
ConnectionPool.

Ordering and paging are pushed down to the database: ORDER BY is built
from a whitelist of sortable columns and always ends with ``id`` so page
boundaries are deterministic. Count and fetch run as two statements on
the same connection without a shared transaction snapshot.
"""

import logging
from pathlib import Path

from psycopg import sql
from psycopg_pool import ConnectionPool

from restdemo.domain.pagination import Sort
from restdemo.domain.ports import TODO_SORT_FIELDS, Resource, Todo

logger = logging.getLogger(__name__)

_TODO_COLUMNS = (
    "id, title, description, due_date, tags, completed, completed_at, "
    "archived, assigned_user_id, created_at"
)

_ARCHIVED_FILTER = "WHERE (%(archived)s::boolean IS NULL OR archived = %(archived)s)"


def _row_to_todo(row: tuple) -> Todo:
    return Todo(
        id=row[0],
        title=row[1],
        description=row[2],
        due_date=row[3],
        tags=list(row[4] or []),
        completed=row[5],
        completed_at=row[6],
        archived=row[7],
        assigned_user_id=row[8],
        created_at=row[9],
    )


def _order_by(sort: Sort) -> sql.Composed:
    """Build ORDER BY terms in requested order, adding the id tiebreaker unless id is sorted on."""
    terms = [
        sql.SQL("{} {}").format(sql.Identifier(TODO_SORT_FIELDS[order.field]), sql.SQL(order.direction.value))
        for order in sort.orders
    ]
    if not any(TODO_SORT_FIELDS[order.field] == "id" for order in sort.orders):
        terms.append(sql.SQL("id ASC"))
    return sql.SQL(", ").join(terms)


class PostgresTodoRepository:
    """
    Implements TodoRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All values are bound as query parameters; only whitelisted
    identifiers are composed into SQL.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_all(self) -> list[Todo]:
        query = f"SELECT {_TODO_COLUMNS} FROM todos ORDER BY id"
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query)
            return [_row_to_todo(row) for row in cursor.fetchall()]

    def find_by_id(self, todo_id: int) -> Todo | None:
        query = f"SELECT {_TODO_COLUMNS} FROM todos WHERE id = %s"
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (todo_id,))
            row = cursor.fetchone()
            return _row_to_todo(row) if row is not None else None

    def save(self, todo: Todo) -> Todo:
        """
        Insert a new to-do, or upsert one that already carries an id.

        Returns:
            The stored to-do with database-assigned id and created_at
        """
        params = {
            "id": todo.id,
            "title": todo.title,
            "description": todo.description,
            "due_date": todo.due_date,
            "tags": list(todo.tags),
            "completed": todo.completed,
            "completed_at": todo.completed_at,
            "archived": todo.archived,
            "assigned_user_id": todo.assigned_user_id,
        }

        if todo.id is None:
            query = f"""
                INSERT INTO todos (title, description, due_date, tags, completed,
                                   completed_at, archived, assigned_user_id, created_at)
                VALUES (%(title)s, %(description)s, %(due_date)s, %(tags)s, %(completed)s,
                        %(completed_at)s, %(archived)s, %(assigned_user_id)s, NOW())
                RETURNING {_TODO_COLUMNS}
            """
        else:
            query = f"""
                INSERT INTO todos (id, title, description, due_date, tags, completed,
                                   completed_at, archived, assigned_user_id, created_at)
                VALUES (%(id)s, %(title)s, %(description)s, %(due_date)s, %(tags)s, %(completed)s,
                        %(completed_at)s, %(archived)s, %(assigned_user_id)s, NOW())
                ON CONFLICT (id) DO UPDATE
                SET title = EXCLUDED.title,
                    description = EXCLUDED.description,
                    due_date = EXCLUDED.due_date,
                    tags = EXCLUDED.tags,
                    completed = EXCLUDED.completed,
                    completed_at = EXCLUDED.completed_at,
                    archived = EXCLUDED.archived,
                    assigned_user_id = EXCLUDED.assigned_user_id
                RETURNING {_TODO_COLUMNS}
            """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, params)
            row = cursor.fetchone()
            conn.commit()
            return _row_to_todo(row)

    def delete_by_id(self, todo_id: int) -> None:
        with self._pool.connection() as conn:
            conn.execute("DELETE FROM todos WHERE id = %s", (todo_id,))
            conn.commit()

    def count(self) -> int:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT COUNT(*) FROM todos")
            return cursor.fetchone()[0]

    def find_page(
        self, offset: int, limit: int, sort: Sort, *, archived: bool | None = None
    ) -> tuple[list[Todo], int]:
        """
        Fetch one slice of to-dos plus the count of all matching rows.

        Args:
            offset: Number of matching rows to skip
            limit: Maximum rows to return
            sort: Orders on TODO_SORT_FIELDS keys
            archived: Filter on the archived flag; None matches all

        Returns:
            Tuple of (items, total matching rows)
        """
        count_query = sql.SQL("SELECT COUNT(*) FROM todos " + _ARCHIVED_FILTER)
        page_query = sql.SQL(
            "SELECT " + _TODO_COLUMNS + " FROM todos " + _ARCHIVED_FILTER
            + " ORDER BY {order_by} LIMIT %(limit)s OFFSET %(offset)s"
        ).format(order_by=_order_by(sort))
        params = {"archived": archived, "limit": limit, "offset": offset}

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(count_query, params)
            total = cursor.fetchone()[0]
            cursor.execute(page_query, params)
            items = [_row_to_todo(row) for row in cursor.fetchall()]
        return items, total


class PostgresResourceRepository:
    """Implements ResourceRepository protocol via psycopg3."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def find_all(self) -> list[Resource]:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT id, name FROM resources ORDER BY id")
            return [Resource(id=row[0], name=row[1]) for row in cursor.fetchall()]

    def find_by_id(self, resource_id: str) -> Resource | None:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT id, name FROM resources WHERE id = %s", (resource_id,))
            row = cursor.fetchone()
            return Resource(id=row[0], name=row[1]) if row is not None else None

    def save(self, resource: Resource) -> Resource:
        query = """
            INSERT INTO resources (id, name)
            VALUES (%s, %s)
            ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name
        """
        with self._pool.connection() as conn:
            conn.execute(query, (resource.id, resource.name))
            conn.commit()
        return resource

    def delete_by_id(self, resource_id: str) -> None:
        with self._pool.connection() as conn:
            conn.execute("DELETE FROM resources WHERE id = %s", (resource_id,))
            conn.commit()

    def count(self) -> int:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT COUNT(*) FROM resources")
            return cursor.fetchone()[0]


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: restdemo/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
