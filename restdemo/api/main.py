"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from restdemo.adapters.repository import (
    InMemoryResourceRepository,
    InMemoryTodoRepository,
    PostgresResourceRepository,
    PostgresTodoRepository,
    run_migrations,
)
from restdemo.adapters.seed import DemoDataSeeder
from restdemo.api.context import REQUEST_ID_HEADER, new_request_id, validate_request_id
from restdemo.api.errors import internal_error_response, register_error_handlers
from restdemo.api.models import HealthResponse
from restdemo.api.routers import router as api_router
from restdemo.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# OpenAPI tags for documentation grouping
tags_metadata = [
    {"name": "todos", "description": "To-do items with header-checked, paginated listings"},
    {"name": "resources", "description": "Named resources guarded by X-Auth-Token"},
]


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("restdemo").setLevel(level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool and runs migrations when DATABASE_URL is set
    - Seeds demo to-dos when SEED_DEMO_DATA is enabled
    - Closes connection pool on shutdown
    """
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)

    logger.info("Starting application...")
    pool = None

    if settings.database_url:
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)

        app.state.pool = pool
        app.state.todo_repository = PostgresTodoRepository(pool)
        app.state.resource_repository = PostgresResourceRepository(pool)
    else:
        logger.info("No DATABASE_URL configured, using in-memory storage")

    if settings.seed_demo_data:
        DemoDataSeeder(app.state.todo_repository, count=settings.initial_todo_count).seed()

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    In-memory stores are attached immediately so the app serves requests
    even without running the lifespan; a configured database replaces
    them at startup.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="restdemo",
        description="To-do and resource REST API with header checks, validation and pagination",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pool = None
    app.state.todo_repository = InMemoryTodoRepository()
    app.state.resource_repository = InMemoryResourceRepository()

    register_error_handlers(app)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = validate_request_id(request.headers.get(REQUEST_ID_HEADER)) or new_request_id()
        request.state.request_id = request_id
        try:
            response = await call_next(request)
        except Exception as exc:
            response = internal_error_response(request, exc)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    app.include_router(api_router, prefix="/api")

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health_check(request: Request) -> HealthResponse:
        """
        Health check endpoint with database validation.

        Returns 200 OK if application and database are healthy.
        Raises exception if database connection fails.
        """
        pool = request.app.state.pool
        if pool is not None:
            with pool.connection() as conn:
                conn.execute("SELECT 1")

        return HealthResponse(status="healthy")

    return app


app = create_app()
