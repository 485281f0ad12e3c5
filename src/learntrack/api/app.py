"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from learntrack.api.dependencies import (
    close_engine,
    close_store,
    init_engine,
    init_store,
)
from learntrack.api.models import APIResponse
from learntrack.api.routes import enrollments, health, reports
from learntrack.config import Settings, load_settings
from learntrack.exceptions import (
    ConflictError,
    DependencyUnavailableError,
    InvalidArgumentError,
    InvalidStateError,
    LearnTrackError,
    NotFoundError,
)
from learntrack.lifecycle import (
    CourseNotFoundError,
    EnrollmentEngine,
    UserNotFoundError,
)
from learntrack.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from learntrack.catalog import CatalogLookup

logger = get_logger("api")


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=str(exc)).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map error kinds to HTTP status codes."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    # An unknown user or course on enroll is a bad request
    @app.exception_handler(UserNotFoundError)
    @app.exception_handler(CourseNotFoundError)
    async def enroll_lookup_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(ConflictError)
    async def conflict_handler(_request: Request, exc: ConflictError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(InvalidStateError)
    async def invalid_state_handler(_request: Request, exc: InvalidStateError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(
        _request: Request, exc: InvalidArgumentError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(DependencyUnavailableError)
    async def dependency_unavailable_handler(
        _request: Request, exc: DependencyUnavailableError
    ) -> JSONResponse:
        logger.error("Dependency unavailable: %s", exc)
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc)

    @app.exception_handler(LearnTrackError)
    async def learntrack_error_handler(_request: Request, exc: LearnTrackError) -> JSONResponse:
        logger.exception("Unhandled LearnTrack error", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse[None](data=None, error="Internal server error").model_dump(),
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    catalog: CatalogLookup | None = app.state.catalog
    owns_catalog = catalog is None
    if catalog is None:
        catalog = settings.catalog.create_catalog()

    # Startup
    store = init_store(settings.db_path)
    init_engine(EnrollmentEngine(store=store, catalog=catalog))
    logger.info("LearnTrack API started (db=%s)", settings.db_path)

    yield
    # Shutdown
    close_engine()
    close_store()
    close = getattr(catalog, "close", None)
    if owns_catalog and close is not None:
        close()
    logger.info("LearnTrack API stopped")


def create_app(
    db_path: str | None = None,
    catalog: CatalogLookup | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: SQLite path; overrides the configured one.
        catalog: Catalog to use; by default one is built from settings.
        settings: Service settings; loaded from file/environment if omitted.
    """
    if settings is None:
        settings = load_settings()
    if db_path is not None:
        settings.db_path = db_path

    app = FastAPI(
        title="LearnTrack API",
        description="REST API for LearnTrack - course enrollment lifecycle",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings
    app.state.catalog = catalog

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Reports first: /enrollments/count and /enrollments/stats shadow /{enrollment_id}
    app.include_router(health.router, prefix="/api/v1")
    app.include_router(reports.router, prefix="/api/v1")
    app.include_router(enrollments.router, prefix="/api/v1")

    return app
