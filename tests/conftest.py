"""
pytest Fixtures for Book Catalog Tests

This file contains shared fixtures used across all test files.

For database tests, every test function gets its own SQLite database file
under pytest's tmp_path:
- Isolated: each test starts with an empty books table
- Real pooling: the app and the test use separate pooled connections,
  exactly like two concurrent requests would
- Simple: no external database needed

IMPORTANT: Some PostgreSQL features won't work in SQLite.
For integration tests, point DATABASE_URL at a real PostgreSQL database.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from book_catalog.config import get_settings
from book_catalog.database import Database
from book_catalog.main import create_app
from book_catalog.models import Book
from book_catalog.repositories import BookRepository

# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def database(tmp_path) -> Generator[Database, None, None]:
    """
    A Database gateway on a fresh SQLite file.

    Tables are created before the test and dropped afterwards.
    """
    database = Database(f"sqlite:///{tmp_path / 'book_catalog.db'}")
    database.create_tables()

    yield database

    database.drop_tables()
    database.dispose()


@pytest.fixture
def db_session(database: Database) -> Generator[Session, None, None]:
    """A session for arranging and inspecting data inside a test."""
    session = database.session()

    yield session

    session.close()


@pytest.fixture
def repository(db_session: Session) -> BookRepository:
    return BookRepository(db_session)


@pytest.fixture
def app(database: Database) -> FastAPI:
    """An application instance wired to the test database."""
    return create_app(get_settings(), database=database)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Create a test client.

    Entering the client runs the lifespan (database check), so every test
    using it also proves the app starts against the test database.
    """
    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_book(repository: BookRepository) -> Book:
    """Create a sample book for testing."""
    book = Book(
        title="The Hobbit",
        author="J.R.R. Tolkien",
        type="Fantasy",
        description="A hobbit goes there and back again.",
    )
    repository.create(book)
    return book


@pytest.fixture
def seeded_books(repository: BookRepository) -> list[Book]:
    """
    Five books created oldest to newest.

    "the" appears in exactly three titles (case-insensitive).
    """
    data = [
        ("The Hobbit", "J.R.R. Tolkien", "Fantasy"),
        ("Dracula", "Bram Stoker", "Horror"),
        ("The Big Sleep", "Raymond Chandler", "Crime"),
        ("Treasure Island", "Robert Louis Stevenson", "Adventure"),
        ("Murder on THE Orient Express", "Agatha Christie", "Crime"),
    ]
    books = []
    for title, author, book_type in data:
        book = Book(title=title, author=author, type=book_type)
        repository.create(book)
        books.append(book)
    return books
