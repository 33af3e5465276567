"""
Database Gateway Module

This module sets up SQLAlchemy 2.0 for the Book Catalog.

The Database Object
===================
Instead of a process-wide connection hidden in a module global, the
application builds ONE Database object at startup (see main.create_app)
and keeps it on app.state. It owns:
1. The engine with its connection pool (sized from settings)
2. The session factory used to hand out one session per request

Anything that needs the database receives it explicitly: routes through the
get_db dependency, repositories through their constructor.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session from the pool
2. Use session for all database operations in that request
3. Close session when request ends (connection returns to the pool)

Startup Check
=============
verify_connection() is called once during application startup. If the
database cannot be reached the application refuses to start: there is
nothing useful a book catalog can do without its store.
"""

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine, event, make_url, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from book_catalog.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Engine Options
# =============================================================================
def engine_options(url: str, pool_size: int, max_overflow: int) -> dict:
    """
    Build create_engine() keyword arguments for a database URL.

    - pool_size / max_overflow: size of the shared connection pool
    - pool_pre_ping: test connection health before using it
    - SQLite needs check_same_thread=False because FastAPI runs sync routes
      in a threadpool; an in-memory SQLite database only lives as long as
      its single connection, so it gets a StaticPool.

    Args:
        url: SQLAlchemy database URL
        pool_size: Number of connections kept open
        max_overflow: Extra connections allowed under load

    Returns:
        Keyword arguments for create_engine()
    """
    parsed = make_url(url)
    options: dict = {"pool_pre_ping": True}

    if parsed.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
            return options

    options["pool_size"] = pool_size
    options["max_overflow"] = max_overflow
    return options


# =============================================================================
# SQLite Functions
# =============================================================================
def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def register_sqlite_functions(dbapi_connection, connection_record) -> None:
    """
    Replace SQLite's built-in lower(), which only folds ASCII letters.

    Search lowercases the term with str.lower, so the column side must fold
    case the same way ("Émile" has to match "émile").
    """
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


# =============================================================================
# Database Gateway
# =============================================================================
class Database:
    """
    Owner of the engine, its connection pool and the session factory.

    Usage:
        database = Database(settings.database_url, pool_size=5)
        database.verify_connection()

        with database.session() as db:
            db.execute(select(Book)).scalars().all()

        database.dispose()

    An existing engine can be passed instead of a URL. SQLite engines get a
    Unicode-aware lower() on every connection they open from then on.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        engine: Engine | None = None,
        pool_size: int = 5,
        max_overflow: int = 10,
        echo: bool = False,
    ) -> None:
        if engine is None:
            if url is None:
                raise ValueError("Database needs either a URL or an engine")
            engine = create_engine(
                url,
                echo=echo,
                **engine_options(url, pool_size, max_overflow),
            )

        self.engine = engine
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", register_sqlite_functions)

        # autoflush=False: nothing is written until a repository says so
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=engine,
        )

    def session(self) -> Session:
        """Create a new session bound to the shared pool."""
        return self.session_factory()

    def verify_connection(self) -> None:
        """
        Check that the database answers a trivial query.

        Raises:
            StoreUnavailable: If no connection can be established
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.critical(f"Database connection error: {exc}")
            raise StoreUnavailable("Database connection error") from exc

        logger.info(f"Connected to database ({self.engine.url.get_backend_name()})")

    def is_healthy(self) -> bool:
        """Return True if the database currently answers queries."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning(f"Database health check failed: {exc}")
            return False
        return True

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()

    def create_tables(self) -> None:
        """
        Create all database tables.

        WARNING: In production, use Alembic migrations instead!
        """
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """
        Drop all database tables.

        DANGER: This deletes all data! Only use in development and tests.
        """
        Base.metadata.drop_all(bind=self.engine)


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Takes a session from the Database stored on app.state, yields it to
    the route, and closes it when the request ends (even on errors).

    Yields:
        SQLAlchemy Session instance
    """
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
