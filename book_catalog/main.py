"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - The Database is built here (or passed in by tests) and stored on
     app.state, never in a hidden module global

2. Lifespan Events
   - startup: verify the database answers; if not, refuse to start
   - shutdown: close every pooled connection

3. Middleware Stack
   - Sessions: signed cookie carrying one-shot notices between requests

4. Exception Handlers
   - Database errors and anything unexpected render the HTML error page
     with a generic message; details only go to the log
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import Response

from book_catalog import __version__
from book_catalog.config import Settings, get_settings
from book_catalog.database import Database
from book_catalog.exceptions import StoreUnavailable
from book_catalog.routers import books_router
from book_catalog.views import BookView

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown

    A database that cannot be reached at startup is fatal: the exception
    propagates and the server stops instead of serving error pages.
    """
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    # ----- STARTUP -----
    logger.info(f"Starting {app_settings.app_name}...")
    logger.info(f"Debug mode: {app_settings.debug}")

    try:
        database.verify_connection()
    except StoreUnavailable:
        logger.critical("Cannot start without a database, aborting startup")
        raise

    if app_settings.auto_create_tables:
        database.create_tables()

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {app_settings.app_name}...")
    database.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app(
    app_settings: Settings | None = None,
    database: Database | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to get_settings())
        database: Database gateway to use (defaults to one built from settings)

    Returns:
        Configured FastAPI application instance
    """
    app_settings = app_settings or get_settings()

    if database is None:
        database = Database(
            app_settings.database_url,
            pool_size=app_settings.db_pool_size,
            max_overflow=app_settings.db_max_overflow,
            echo=app_settings.debug,  # Log SQL in debug mode
        )

    app = FastAPI(
        title=app_settings.app_name,
        description="Manage a catalog of books: list, view, add, edit, delete and search.",
        version=__version__,
        lifespan=lifespan,
    )

    # Process-wide collaborators, shared by every request
    app.state.settings = app_settings
    app.state.database = database
    app.state.view = BookView(app_name=app_settings.app_name)

    # -------------------------------------------------------------------------
    # Session Middleware
    # -------------------------------------------------------------------------
    # request.session is a dict stored in a signed cookie. It only carries
    # the one-shot notices shown after create/update/delete.
    app.add_middleware(
        SessionMiddleware,
        secret_key=app_settings.secret_key,
        session_cookie=app_settings.session_cookie,
        https_only=app_settings.is_production,
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> Response:
        """Log the database error, show a generic page."""
        logger.error(f"Database error: {exc}")
        return app.state.view.error(
            request,
            "A database error occurred. Please try again later.",
            500,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> Response:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        message = str(exc) if app_settings.debug else "An internal error occurred."
        return app.state.view.error(request, message, 500)

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the application and its database are healthy.",
    )
    def health_check() -> dict:
        """
        Health check endpoint.

        Used by load balancers and monitoring systems.
        """
        database_healthy = app.state.database.is_healthy()
        return {
            "status": "healthy" if database_healthy else "degraded",
            "app": app_settings.app_name,
            "version": __version__,
            "database": {
                "healthy": database_healthy,
                "backend": app.state.database.engine.url.get_backend_name(),
            },
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn book_catalog.main:app
app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m book_catalog.main
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "book_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
